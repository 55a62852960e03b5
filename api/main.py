"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import analysis, table
from config import config
from core.errors import (
    DepletedRankError,
    InvalidBankrollError,
    InvalidBetError,
    InvalidShoeError,
    MalformedRankError,
    TableStateError,
)

logging.basicConfig(
    level=logging.DEBUG if config.debug else config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _conflict_handler(request: Request, exc: Exception) -> JSONResponse:
    """The request is well-formed but the table cannot honour it."""
    logger.info("Refused %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def _invalid_input_handler(request: Request, exc: Exception) -> JSONResponse:
    """The request carries a value the engine cannot work with."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


app = FastAPI(
    title="TrueCount Terminal",
    description="Blackjack decision support: outcome odds, best action and Kelly bet sizing",
    version="1.0.0",
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Engine errors
app.add_exception_handler(DepletedRankError, _conflict_handler)
app.add_exception_handler(TableStateError, _conflict_handler)
app.add_exception_handler(InvalidBankrollError, _invalid_input_handler)
app.add_exception_handler(MalformedRankError, _invalid_input_handler)
app.add_exception_handler(InvalidShoeError, _invalid_input_handler)
app.add_exception_handler(InvalidBetError, _invalid_input_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(analysis.router, prefix="/api/analysis", tags=["analysis"])
app.include_router(table.router, prefix="/api/table", tags=["table"])
