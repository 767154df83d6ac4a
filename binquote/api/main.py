"""FastAPI application serving bin-pair quotes.

Engine errors that escape a route are turned into typed responses by the
application-level handler, so no engine failure surfaces as a 500:
    {"error": "<engine error code>", "detail": "..."}
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from binquote import __version__
from binquote.api.endpoints import router
from binquote.constants import DEFAULT_ENGINE_CONFIG
from binquote.errors import BinQuoteError, UnknownVariant
from binquote.variants import VARIANTS

logger = structlog.get_logger()

HOST = os.environ.get("BINQUOTE_HOST", "0.0.0.0")
PORT = int(os.environ.get("BINQUOTE_PORT", "8000"))
DEBUG = os.environ.get("BINQUOTE_DEBUG", "false").lower() in ("true", "1", "yes")

# A snapshot with a few thousand bins stays well under 10 MB
MAX_REQUEST_SIZE = int(os.environ.get("BINQUOTE_MAX_REQUEST_SIZE", str(10 * 1024 * 1024)))

app = FastAPI(
    title="binquote",
    description="Exact-in and exact-out quotes for bin-based liquidity pairs",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject snapshot bodies larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        logger.warning(
            "request_too_large",
            path=request.url.path,
            content_length=int(content_length),
            limit=MAX_REQUEST_SIZE,
        )
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(BinQuoteError)
async def engine_error_handler(request: Request, exc: BinQuoteError) -> JSONResponse:
    """Map an engine error to 404 (unknown variant) or 422 with its code."""
    logger.warning("engine_error", path=request.url.path, error=exc.code, detail=str(exc))
    status_code = 404 if isinstance(exc, UnknownVariant) else 422
    return JSONResponse(status_code=status_code, content={"error": exc.code, "detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Liveness plus the variants and engine limits this server quotes with."""
    config = DEFAULT_ENGINE_CONFIG
    return {
        "status": "ok",
        "version": __version__,
        "variants": sorted(VARIANTS),
        "engine": {
            "max_fee": config.max_fee,
            "fee_precision": config.precision,
            "storage_id_space": config.max_storage_id,
        },
    }


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - BINQUOTE_HOST: Host to bind to (default: 0.0.0.0)
    - BINQUOTE_PORT: Port to bind to (default: 8000)
    - BINQUOTE_DEBUG: Enable reload mode (default: false)
    - BINQUOTE_MAX_REQUEST_SIZE: Largest accepted body in bytes (default: 10 MB)
    """
    logger.info("starting_quote_api", host=HOST, port=PORT, variants=sorted(VARIANTS))
    uvicorn.run(
        "binquote.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
