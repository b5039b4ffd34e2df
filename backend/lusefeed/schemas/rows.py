from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel


EMPTY: Literal[""] = ""

HEADER: list[str] = ["Ticker", "Company", "Last", "Bid", "Ask", "Change", "Volume", "Value"]

Number = Union[int, float]
Cell = Union[str, int, float]


class PriceRow(BaseModel):
    ticker: str = EMPTY
    company: str = EMPTY
    last: Union[Number, Literal[""]] = EMPTY
    bid: Union[Number, Literal[""]] = EMPTY
    ask: Union[Number, Literal[""]] = EMPTY
    change: str = EMPTY
    volume: Union[int, Literal[""]] = EMPTY
    value: Union[Number, Literal[""]] = EMPTY

    def as_list(self) -> list[Cell]:
        return [
            self.ticker,
            self.company,
            self.last,
            self.bid,
            self.ask,
            self.change,
            self.volume,
            self.value,
        ]


def build_table(rows: list[PriceRow]) -> list[list[Cell]]:
    return [list(HEADER), *(row.as_list() for row in rows)]


# Served when every upstream source fails. Prices are stale placeholders.
FALLBACK_ROWS: tuple[PriceRow, ...] = (
    PriceRow(ticker="AVJN", company="ZANACO PLC", last=6.04, change="+0.00%", volume=0, value=0),
    PriceRow(ticker="KODT", company="CEC PLC", last=22.68, change="+0.00%", volume=0, value=0),
)


def fallback_table() -> list[list[Cell]]:
    return build_table(list(FALLBACK_ROWS))
