from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable

from lusefeed.config.settings import ProviderSettings
from lusefeed.errors import ProviderError, ValidationError
from lusefeed.retry import call_with_retry
from lusefeed.schemas.provider import ProviderResult
from lusefeed.schemas.rows import PriceRow


logger = logging.getLogger(__name__)


class Provider(ABC):
    """One upstream source of LuSE listings.

    Subclasses implement ``fetch_rows`` for a single attempt and raise a
    ``ProviderError`` on any failure. ``fetch`` adds bounded retries and the
    minimum-row check, and reports the outcome as a ``ProviderResult``
    instead of raising.
    """

    def __init__(
        self,
        config: ProviderSettings,
        user_agents: list[str],
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.user_agents = user_agents
        self.sleep = sleep

    @property
    def name(self) -> str:
        return self.config.name

    def user_agent(self, attempt: int) -> str:
        return self.user_agents[(attempt - 1) % len(self.user_agents)]

    def timeout(self, remaining: float) -> float:
        return max(min(self.config.timeout_seconds, remaining), 0.1)

    @abstractmethod
    def fetch_rows(self, attempt: int, remaining: float) -> list[PriceRow]:
        """Fetch and normalize rows once."""

    def _validated_rows(self, attempt: int, remaining: float) -> list[PriceRow]:
        rows = self.fetch_rows(attempt, remaining)
        if len(rows) < self.config.min_rows:
            raise ValidationError(
                self.name,
                f"{len(rows)} rows parsed, expected at least {self.config.min_rows}",
            )
        return rows

    def fetch(self) -> ProviderResult:
        try:
            rows, attempts = call_with_retry(
                self._validated_rows,
                attempts=self.config.attempts,
                base_delay=self.config.base_delay_seconds,
                ceiling=self.config.ceiling_seconds,
                sleep=self.sleep,
            )
        except ProviderError as exc:
            logger.warning("Provider %s failed (%s): %s", self.name, exc.status, exc.message)
            return ProviderResult(provider=self.name, status=exc.status, error=exc.message)

        logger.info("Provider %s returned %d rows after %d attempt(s)", self.name, len(rows), attempts)
        return ProviderResult(provider=self.name, rows=rows, attempts=attempts)
