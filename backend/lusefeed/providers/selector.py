from __future__ import annotations

import logging
import time
from typing import Callable

from lusefeed.config.settings import ProviderSettings, Settings
from lusefeed.providers.base import Provider
from lusefeed.providers.html import HtmlKeywordProvider, HtmlMaxHeaderProvider
from lusefeed.providers.structured import StructuredJsonProvider
from lusefeed.schemas.provider import ProviderResult


logger = logging.getLogger(__name__)

PROVIDER_KINDS: dict[str, type[Provider]] = {
    "structured_json": StructuredJsonProvider,
    "html_max_header": HtmlMaxHeaderProvider,
    "html_keyword": HtmlKeywordProvider,
}


def build_provider(
    config: ProviderSettings,
    user_agents: list[str],
    sleep: Callable[[float], None] = time.sleep,
) -> Provider:
    provider_cls = PROVIDER_KINDS[config.kind]
    return provider_cls(config, user_agents, sleep=sleep)


def build_providers(
    settings: Settings, sleep: Callable[[float], None] = time.sleep
) -> list[Provider]:
    return [
        build_provider(config, settings.user_agents, sleep=sleep)
        for config in settings.ordered_providers()
    ]


def fetch_with_fallback(providers: list[Provider]) -> ProviderResult | None:
    """Try each provider in order and return the first successful result."""
    for provider in providers:
        result = provider.fetch()
        if result.ok:
            return result
        logger.info("Falling through from %s (%s)", provider.name, result.status)
    return None
