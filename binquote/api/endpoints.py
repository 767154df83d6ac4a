"""API endpoints for the quote engine."""

import asyncio
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from binquote import price as price_ladder
from binquote import quoter
from binquote.errors import UnknownVariant
from binquote.models.types import Uint64
from binquote.quoter import QuoteError, QuoteResult
from binquote.swap.router import BinSwapRouter, bin_swap_router
from binquote.variants import get_variant

logger = structlog.get_logger()

router = APIRouter()


class QuoteRequest(BaseModel):
    """Body of a swap quote request."""

    pair: dict[str, Any] = Field(description="Pair snapshot as emitted by the chain indexer")
    amount: Uint64 = Field(description="amount_in for exact-in, amount_out for exact-out")
    swap_for_y: bool
    timestamp_ms: Uint64


class SwapOutResponse(BaseModel):
    """Exact-in quote. Amounts are decimal strings (u64 exceeds JSON-safe integers)."""

    amount_in_left: str
    amount_out: str
    fee: str
    bins_crossed: int


class SwapInResponse(BaseModel):
    """Exact-out quote. Amounts are decimal strings."""

    amount_in: str
    amount_out_left: str
    fee: str
    bins_crossed: int


class PriceResponse(BaseModel):
    """Bin id mapping and 128.128 price of one bin."""

    real_id: int
    storage_id: int
    bin_step: int
    price_q128: str


class BinIdResponse(BaseModel):
    """Bin that a 128.128 price falls in."""

    real_id: int
    storage_id: int
    bin_step: int


def get_router() -> BinSwapRouter:
    """Dependency provider for the swap router.

    Override this in tests to inject another router:
        app.dependency_overrides[get_router] = lambda: custom_router
    """
    return bin_swap_router


def _error_response(result: QuoteResult) -> JSONResponse:
    error = result.error or QuoteError.ENGINE_ERROR
    status_code = 404 if error is QuoteError.UNKNOWN_VARIANT else 422
    return JSONResponse(
        status_code=status_code,
        content={"error": error.value, "detail": result.error_detail},
    )


async def _quote(
    operation: str, variant: str, request: QuoteRequest, swap_router: BinSwapRouter
) -> QuoteResult:
    try:
        pool_variant = get_variant(variant)
    except UnknownVariant as e:
        logger.warning("unknown_variant", variant=variant)
        return QuoteResult.with_error(QuoteError.UNKNOWN_VARIANT, str(e))

    logger.info(
        "received_quote",
        operation=operation,
        variant=pool_variant.name,
        amount=request.amount,
        swap_for_y=request.swap_for_y,
        bin_count=len(request.pair.get("bins", [])),
    )

    compute = (
        quoter.compute_swap_exact_in
        if operation == "exact_in"
        else quoter.compute_swap_exact_out
    )
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(
            None,
            compute,
            request.pair,
            request.amount,
            request.swap_for_y,
            request.timestamp_ms,
            pool_variant,
            swap_router,
        )
    except Exception:
        # Engine errors are already folded into the result; anything else is a bug
        logger.exception("quote_error", operation=operation, variant=pool_variant.name)
        return QuoteResult.with_error(QuoteError.ENGINE_ERROR, "Unexpected error while quoting")


@router.post("/{variant}/quote/exact-in", response_model=SwapOutResponse)
async def quote_exact_in(
    variant: str,
    request: QuoteRequest,
    swap_router: BinSwapRouter = Depends(get_router),
) -> Any:
    """Quote the output of an exact-input swap.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - Unknown variant: 404 {"error": "unknown_variant", ...}
        - Engine failure: 422 {"error": <code>, "detail": ...}
    """
    result = await _quote("exact_in", variant, request, swap_router)
    if result.is_error:
        return _error_response(result)
    out = result.value
    return SwapOutResponse(
        amount_in_left=str(out.amount_in_left),
        amount_out=str(out.amount_out),
        fee=str(out.fee),
        bins_crossed=out.bins_crossed,
    )


@router.post("/{variant}/quote/exact-out", response_model=SwapInResponse)
async def quote_exact_out(
    variant: str,
    request: QuoteRequest,
    swap_router: BinSwapRouter = Depends(get_router),
) -> Any:
    """Quote the input needed for an exact-output swap."""
    result = await _quote("exact_out", variant, request, swap_router)
    if result.is_error:
        return _error_response(result)
    out = result.value
    return SwapInResponse(
        amount_in=str(out.amount_in),
        amount_out_left=str(out.amount_out_left),
        fee=str(out.fee),
        bins_crossed=out.bins_crossed,
    )


@router.get("/price/{real_id}", response_model=PriceResponse)
async def bin_price(real_id: int, bin_step: int = Query(ge=0, le=2**16 - 1)) -> Any:
    """Storage id and 128.128 price of the bin at real_id.

    Ladder errors reach the application's engine error handler.
    """
    storage_id = price_ladder.storage_id_from_real_id(real_id)
    return PriceResponse(
        real_id=real_id,
        storage_id=storage_id,
        bin_step=bin_step,
        price_q128=str(price_ladder.price_from_storage_id(storage_id, bin_step)),
    )


@router.get("/bin-id", response_model=BinIdResponse)
async def bin_id_for_price(
    price_q128: str = Query(pattern=r"^\d+$"),
    bin_step: int = Query(ge=0, le=2**16 - 1),
) -> Any:
    """Bin a 128.128 price maps to on the ladder of bin_step."""
    real_id = price_ladder.real_id_from_price(int(price_q128), bin_step)
    return BinIdResponse(
        real_id=real_id,
        storage_id=price_ladder.storage_id_from_real_id(real_id),
        bin_step=bin_step,
    )
