import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from lusefeed.resolution import ResolutionChain
from lusefeed.schemas.provider import CacheStatus

logger = logging.getLogger(__name__)

router = APIRouter()


def get_chain(request: Request) -> ResolutionChain:
    return request.app.state.chain


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "LuSE price API - use /prices/table"


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/prices/table")
async def get_price_table(chain: ResolutionChain = Depends(get_chain)) -> JSONResponse:
    try:
        rows = await run_in_threadpool(chain.resolve)
        return JSONResponse(content=rows)
    except Exception:
        logger.exception("Price table resolution failed unexpectedly")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "server error"},
        )


@router.get("/prices/status", response_model=CacheStatus)
async def get_price_status(chain: ResolutionChain = Depends(get_chain)) -> CacheStatus:
    ttl_seconds = chain.cache.ttl_seconds
    entry = chain.cache.peek()
    if entry is None:
        return CacheStatus(ttl_seconds=ttl_seconds)
    return CacheStatus(
        source=entry.source,
        resolved_at=entry.timestamp,
        age_seconds=round(entry.age(chain.cache.clock()), 3),
        ttl_seconds=ttl_seconds,
        rows=max(len(entry.rows) - 1, 0),
    )
