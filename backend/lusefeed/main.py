"""Application factory: settings -> cache -> providers -> resolution chain."""

from __future__ import annotations

from fastapi import FastAPI

from lusefeed.api.routes import router
from lusefeed.cache import build_cache
from lusefeed.config.settings import Settings, settings
from lusefeed.logging_config import configure_logging
from lusefeed.providers.selector import build_providers
from lusefeed.resolution import ResolutionChain


def build_chain(app_settings: Settings) -> ResolutionChain:
    return ResolutionChain(build_providers(app_settings), build_cache(app_settings))


def create_app(
    app_settings: Settings | None = None, chain: ResolutionChain | None = None
) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    app = FastAPI(title="LuSE Price Feed")
    app.state.settings = app_settings
    app.state.chain = chain or build_chain(app_settings)
    app.include_router(router)
    return app


app = create_app()
