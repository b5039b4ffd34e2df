from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ProviderKind = Literal["structured_json", "html_max_header", "html_keyword"]


class ProviderSettings(BaseModel):
    name: str
    kind: ProviderKind
    url: str
    rank: int = 100
    enabled: bool = True
    min_rows: int = Field(default=1, ge=1)
    min_cells: int = Field(default=2, ge=1)
    attempts: int = Field(default=2, ge=1, le=4)
    base_delay_seconds: float = Field(default=0.25, ge=0)
    timeout_seconds: float = Field(default=15.0, gt=0)
    ceiling_seconds: float = Field(default=30.0, gt=0)
    # Fixed cell positions for pages whose table has no usable header text.
    columns: Dict[str, int] | None = None
    records_key: str | None = None


def _default_providers() -> List[ProviderSettings]:
    return [
        ProviderSettings(
            name="luse_api",
            kind="structured_json",
            url="https://www.luse.co.zm/api/securities/",
            rank=10,
            min_rows=1,
            attempts=3,
            timeout_seconds=10.0,
            ceiling_seconds=20.0,
        ),
        ProviderSettings(
            name="luse_listings",
            kind="html_max_header",
            url="https://www.luse.co.zm/listed-companies/",
            rank=20,
            min_rows=1,
            min_cells=3,
            attempts=3,
            columns={
                "company": 0,
                "ticker": 1,
                "last": 2,
                "change": 3,
                "volume": 4,
                "value": 5,
            },
        ),
        ProviderSettings(
            name="luse_market_data",
            kind="html_keyword",
            url="https://www.luse.co.zm/trading/market-data/",
            rank=30,
            min_rows=3,
            min_cells=3,
            attempts=4,
        ),
        ProviderSettings(
            name="african_markets",
            kind="html_keyword",
            url="https://www.african-markets.com/en/stock-markets/luse/listed-companies",
            rank=40,
            min_rows=3,
            min_cells=2,
            attempts=2,
        ),
    ]


def _default_user_agents() -> List[str]:
    return [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Version/17.4 Safari/605.1.15",
        "Mozilla/5.0 (X11; Linux x86_64; rv:125.0) Gecko/20100101 Firefox/125.0",
    ]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LUSEFEED_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "LUSEFEED_PORT"),
    )
    log_level: str = "INFO"

    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    cache_backend: Literal["memory", "redis"] = "memory"
    cache_key: str = "lusefeed:prices:table"
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "LUSEFEED_REDIS_URL"),
    )

    user_agents: List[str] = Field(default_factory=_default_user_agents, min_length=1)
    providers: List[ProviderSettings] = Field(default_factory=_default_providers)

    def ordered_providers(self) -> List[ProviderSettings]:
        enabled = [provider for provider in self.providers if provider.enabled]
        return sorted(enabled, key=lambda provider: provider.rank)


settings = Settings()
