from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from lusefeed.schemas.rows import PriceRow


ProviderStatus = Literal["ok", "transport_error", "parse_error", "invalid", "no_table", "error"]


class ProviderResult(BaseModel):
    provider: str
    status: ProviderStatus = "ok"
    rows: list[PriceRow] = Field(default_factory=list)
    attempts: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class CacheStatus(BaseModel):
    source: str | None = None
    resolved_at: float | None = None
    age_seconds: float | None = None
    ttl_seconds: float
    rows: int = 0
