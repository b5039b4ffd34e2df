from __future__ import annotations

from abc import abstractmethod

from bs4 import BeautifulSoup
from bs4.element import Tag

from lusefeed.errors import TableNotFoundError
from lusefeed.transport import fetch_text
from lusefeed.parsing.normalize import normalize_cells
from lusefeed.parsing.tables import (
    ColumnMap,
    body_rows,
    parse_document,
    select_by_keywords,
    select_max_header,
)
from lusefeed.providers.base import Provider
from lusefeed.schemas.rows import PriceRow


# Column layout of the LuSE market-data table when no map is configured.
DEFAULT_COLUMNS = ColumnMap(company=0, ticker=1, last=2, change=3, volume=4, value=5)


class HtmlTableProvider(Provider):
    @abstractmethod
    def select_table(self, document: BeautifulSoup) -> tuple[Tag, ColumnMap]:
        """Pick the market-data table and its column positions."""

    def parse(self, html: str) -> list[PriceRow]:
        table, columns = self.select_table(parse_document(html))
        rows: list[PriceRow] = []
        for cells in body_rows(table):
            row = normalize_cells(cells, columns, self.config.min_cells)
            if row is not None:
                rows.append(row)
        return rows

    def fetch_rows(self, attempt: int, remaining: float) -> list[PriceRow]:
        html = fetch_text(
            self.name,
            self.config.url,
            user_agent=self.user_agent(attempt),
            timeout=self.timeout(remaining),
        )
        return self.parse(html)


class HtmlMaxHeaderProvider(HtmlTableProvider):
    """Takes the table with the most header cells and reads fixed columns."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        if self.config.columns:
            self.columns = ColumnMap.from_mapping(self.config.columns)
        else:
            self.columns = DEFAULT_COLUMNS

    def select_table(self, document: BeautifulSoup) -> tuple[Tag, ColumnMap]:
        table = select_max_header(document)
        if table is None:
            raise TableNotFoundError(self.name, "No table found")
        return table, self.columns


class HtmlKeywordProvider(HtmlTableProvider):
    """Takes the first table whose header names ticker/company and price columns."""

    def select_table(self, document: BeautifulSoup) -> tuple[Tag, ColumnMap]:
        selected = select_by_keywords(document)
        if selected is None:
            raise TableNotFoundError(self.name, "No table found")
        return selected
