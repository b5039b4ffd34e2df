from __future__ import annotations

from typing import Any

from lusefeed.errors import ParseError
from lusefeed.transport import fetch_json
from lusefeed.parsing.normalize import normalize_record
from lusefeed.providers.base import Provider
from lusefeed.schemas.rows import PriceRow


_WRAPPER_KEYS = ("data", "securities", "results", "items")


class StructuredJsonProvider(Provider):
    """Security listings from a JSON endpoint."""

    def _records(self, payload: Any) -> list[Any]:
        if isinstance(payload, list):
            return payload
        if not isinstance(payload, dict):
            raise ParseError(self.name, f"Unexpected payload type {type(payload).__name__}")

        keys = (self.config.records_key,) if self.config.records_key else _WRAPPER_KEYS
        for key in keys:
            records = payload.get(key)
            if isinstance(records, list):
                return records
        raise ParseError(self.name, "No list of records in payload")

    def fetch_rows(self, attempt: int, remaining: float) -> list[PriceRow]:
        payload = fetch_json(
            self.name,
            self.config.url,
            user_agent=self.user_agent(attempt),
            timeout=self.timeout(remaining),
        )
        rows: list[PriceRow] = []
        for record in self._records(payload):
            if not isinstance(record, dict):
                continue
            row = normalize_record(record)
            if row is not None:
                rows.append(row)
        return rows
