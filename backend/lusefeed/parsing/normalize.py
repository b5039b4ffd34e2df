from __future__ import annotations

import math
from typing import Any, Mapping

from lusefeed.parsing.numbers import (
    Coerced,
    coerce_amount,
    coerce_count,
    coerce_number,
    format_change,
)
from lusefeed.parsing.tables import ColumnMap
from lusefeed.schemas.rows import EMPTY, PriceRow


RECORD_ALIASES: dict[str, tuple[str, ...]] = {
    "ticker": ("ticker", "symbol", "code", "securityCode"),
    "company": ("securityName", "company", "companyName", "name"),
    "last": ("lastPrice", "last", "closingPrice", "close", "price"),
    "bid": ("bid", "bidPrice"),
    "ask": ("ask", "askPrice", "offer"),
    "change": ("change", "percentChange", "changePercent", "pctChange"),
    "volume": ("volume", "tradedVolume", "quantity"),
    "value": ("value", "turnover", "tradedValue"),
}


def _text(value: Any) -> str:
    if value is None:
        return EMPTY
    return " ".join(str(value).split())


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def derive_value(last: Coerced, volume: Coerced, supplied: Coerced) -> Coerced:
    """Turnover precedence: supplied value, then last * volume, then EMPTY."""
    if supplied != EMPTY:
        return supplied
    if last == EMPTY or volume == EMPTY:
        return EMPTY
    product = last * volume
    if not math.isfinite(product):
        return EMPTY
    return round(product, 2)


def _build_row(
    ticker: str,
    company: str,
    last: Any,
    bid: Any,
    ask: Any,
    change: Any,
    volume: Any,
    value: Any,
) -> PriceRow:
    last_number = coerce_number(last)
    volume_count = coerce_count(volume)
    return PriceRow(
        ticker=ticker or company,
        company=company,
        last=last_number,
        bid=coerce_number(bid),
        ask=coerce_number(ask),
        change=format_change(change),
        volume=volume_count,
        value=derive_value(last_number, volume_count, coerce_amount(value)),
    )


def normalize_record(record: Mapping[str, Any]) -> PriceRow | None:
    """Normalize one structured record; records naming no security are skipped."""
    picked = {name: _first_present(record, keys) for name, keys in RECORD_ALIASES.items()}
    ticker = _text(picked["ticker"])
    company = _text(picked["company"])
    if not ticker and not company:
        return None
    return _build_row(
        ticker,
        company,
        picked["last"],
        picked["bid"],
        picked["ask"],
        picked["change"],
        picked["volume"],
        picked["value"],
    )


def normalize_cells(cells: list[str], columns: ColumnMap, min_cells: int = 2) -> PriceRow | None:
    """Normalize one table row, or return None for header/separator rows."""
    usable = [cell for cell in cells if cell.strip()]
    if len(usable) < min_cells:
        return None
    ticker = _text(columns.cell(cells, "ticker"))
    company = _text(columns.cell(cells, "company"))
    if not ticker and not company:
        return None
    return _build_row(
        ticker,
        company,
        columns.cell(cells, "last"),
        columns.cell(cells, "bid"),
        columns.cell(cells, "ask"),
        columns.cell(cells, "change"),
        columns.cell(cells, "volume"),
        columns.cell(cells, "value"),
    )
