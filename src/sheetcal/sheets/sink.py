from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any, Protocol, runtime_checkable

from ..errors import SinkCallFailedError
from .requests import StructuralRequest, summarize_requests, to_wire_requests
from .types import ValueInputOption
from .values import ValueUpdate, to_wire_value_ranges

logger = logging.getLogger(__name__)


@runtime_checkable
class SheetSink(Protocol):
    """Destination that applies request batches to one spreadsheet.

    Each call is one blocking, all-or-nothing batch. Implementations raise
    ``SinkCallFailedError`` when a batch cannot be applied.
    """

    def apply_structural_requests(
        self, sheet_id: int, requests: Sequence[StructuralRequest]
    ) -> None:
        """Apply formatting/layout requests to ``sheet_id``."""

    def apply_value_updates(
        self, sheet_id: int, updates: Sequence[ValueUpdate]
    ) -> None:
        """Write value/formula blocks into ``sheet_id``."""


class GoogleSheetsSink:
    """Sink backed by a Google Sheets API v4 service object.

    The service is built by the caller (for example with
    ``googleapiclient.discovery.build("sheets", "v4", credentials=...)``);
    only ``spreadsheets().batchUpdate`` and
    ``spreadsheets().values().batchUpdateByDataFilter`` are used.
    """

    def __init__(
        self,
        service: Any,
        spreadsheet_id: str,
        *,
        value_input_option: ValueInputOption = "USER_ENTERED",
    ) -> None:
        self._service = service
        self._spreadsheet_id = spreadsheet_id
        self._value_input_option = value_input_option

    def apply_structural_requests(
        self, sheet_id: int, requests: Sequence[StructuralRequest]
    ) -> None:
        payload = to_wire_requests(sheet_id, requests)
        if not payload:
            return
        logger.info(
            "Sending %s structural requests to sheet %s: %s",
            len(payload),
            sheet_id,
            summarize_requests(requests),
        )
        body = {"requests": payload}
        try:
            self._service.spreadsheets().batchUpdate(
                spreadsheetId=self._spreadsheet_id, body=body
            ).execute()
        except Exception as exc:
            raise SinkCallFailedError("spreadsheets.batchUpdate", str(exc)) from exc

    def apply_value_updates(
        self, sheet_id: int, updates: Sequence[ValueUpdate]
    ) -> None:
        data = to_wire_value_ranges(sheet_id, updates)
        if not data:
            return
        logger.info("Sending %s value ranges to sheet %s.", len(data), sheet_id)
        body = {"valueInputOption": self._value_input_option, "data": data}
        try:
            self._service.spreadsheets().values().batchUpdateByDataFilter(
                spreadsheetId=self._spreadsheet_id, body=body
            ).execute()
        except Exception as exc:
            raise SinkCallFailedError(
                "spreadsheets.values.batchUpdateByDataFilter", str(exc)
            ) from exc


__all__ = ["GoogleSheetsSink", "SheetSink"]
