from __future__ import annotations

import pytest

from lusefeed.config.settings import ProviderSettings
from lusefeed.providers.base import Provider
from lusefeed.schemas.rows import PriceRow


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedProvider(Provider):
    """Provider whose single attempt returns rows or raises a given error."""

    def __init__(self, name: str, outcome, min_rows: int = 1, attempts: int = 1) -> None:
        config = ProviderSettings(
            name=name,
            kind="structured_json",
            url=f"https://example.test/{name}",
            min_rows=min_rows,
            attempts=attempts,
            base_delay_seconds=0.0,
        )
        super().__init__(config, ["test-agent"], sleep=lambda _: None)
        self.outcome = outcome
        self.calls = 0

    def fetch_rows(self, attempt: int, remaining: float) -> list[PriceRow]:
        self.calls += 1
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return list(self.outcome)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_rows() -> list[PriceRow]:
    return [
        PriceRow(ticker="AVJN", company="ZANACO PLC", last=6.04, change="+0.00%"),
        PriceRow(ticker="KODT", company="CEC PLC", last=22.68, volume=1000, value=22680.0),
        PriceRow(ticker="SCBL", company="STANDARD CHARTERED BANK ZAMBIA PLC", last=2.2),
    ]
