from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from typing import Mapping

from bs4 import BeautifulSoup
from bs4.element import Tag


logger = logging.getLogger(__name__)

ABSENT = -1

# Checked in this order per header cell, so "Price Change %" maps to change
# rather than last.
FIELD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "ticker": ("ticker", "symbol"),
    "company": ("company", "name"),
    "bid": ("bid",),
    "ask": ("ask",),
    "volume": ("volume",),
    "value": ("value", "turnover"),
    "change": ("change", "%"),
    "last": ("last", "price"),
}

WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ColumnMap:
    ticker: int = ABSENT
    company: int = ABSENT
    last: int = ABSENT
    bid: int = ABSENT
    ask: int = ABSENT
    change: int = ABSENT
    volume: int = ABSENT
    value: int = ABSENT

    @classmethod
    def from_mapping(cls, columns: Mapping[str, int]) -> ColumnMap:
        known = {field.name for field in fields(cls)}
        unknown = set(columns) - known
        if unknown:
            raise ValueError(f"Unknown column names: {', '.join(sorted(unknown))}")
        return cls(**dict(columns))

    def cell(self, cells: list[str], name: str) -> str:
        index = getattr(self, name)
        if index == ABSENT or index >= len(cells):
            return ""
        return cells[index]


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def cell_text(cell: Tag) -> str:
    return WHITESPACE_RE.sub(" ", cell.get_text(" ", strip=True)).strip()


def header_row(table: Tag) -> Tag | None:
    """The first row of <thead>, or the first row of the table without one."""
    thead = table.find("thead")
    if thead is not None:
        row = thead.find("tr")
        if row is not None:
            return row
    return table.find("tr")


def row_cells(row: Tag) -> list[str]:
    return [cell_text(cell) for cell in row.find_all(["th", "td"], recursive=False)]


def header_cells(table: Tag) -> list[str]:
    row = header_row(table)
    if row is None:
        return []
    return row_cells(row)


def body_rows(table: Tag) -> list[list[str]]:
    """Return the cells of every data row.

    The header row is skipped even when it is made of <td> cells, as are
    rows with no <td> at all. Row-header <th> cells are kept in place so
    column positions line up with the header.
    """
    header = header_row(table)
    rows: list[list[str]] = []
    for tr in table.find_all("tr"):
        if tr is header or tr.find("td", recursive=False) is None:
            continue
        rows.append(row_cells(tr))
    return rows


def select_max_header(document: BeautifulSoup) -> Tag | None:
    target: Tag | None = None
    max_headers = 0
    for table in document.find_all("table"):
        row = header_row(table)
        count = len(row.find_all("th", recursive=False)) if row is not None else 0
        if count > max_headers:
            max_headers = count
            target = table
    if target is None:
        logger.debug("No table with header cells found")
    return target


def map_columns(headers: list[str]) -> ColumnMap:
    assigned: dict[str, int] = {}
    for index, header in enumerate(headers):
        label = header.lower()
        for name, keywords in FIELD_KEYWORDS.items():
            if name in assigned:
                continue
            if any(keyword in label for keyword in keywords):
                assigned[name] = index
                break
    return ColumnMap(**assigned)


def select_by_keywords(document: BeautifulSoup) -> tuple[Tag, ColumnMap] | None:
    for position, table in enumerate(document.find_all("table")):
        columns = map_columns(header_cells(table))
        identified = columns.ticker != ABSENT or columns.company != ABSENT
        if identified and columns.last != ABSENT:
            logger.debug("Selected table %d with columns %s", position, columns)
            return table, columns
    logger.debug("No table header matched the market-data keywords")
    return None
