"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import math
import os
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from ygl_proxy.api.endpoints.listings import listings_api
from ygl_proxy.database.memory_cache import ResponseCache
from ygl_proxy.error_handler import ErrorHandler, NotFoundError, ProxyError, RateLimitError, error_envelope
from ygl_proxy.integrations.clients.real_http.ygl import YGLClient
from ygl_proxy.utils.config_loader import Settings, load_settings
from ygl_proxy.utils.rate_limiter import RateLimiter

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("ygl_proxy.access")

RATE_LIMITED_PREFIX = "/api/"


def _add_rate_limit(app: FastAPI, limiter: RateLimiter) -> None:
    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if not request.url.path.startswith(RATE_LIMITED_PREFIX):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        decision = limiter.hit(client_ip)
        if not decision.allowed:
            error = RateLimitError("Too many requests, please try again later.")
            return JSONResponse(
                status_code=error.status,
                content=error_envelope(error),
                headers={"Retry-After": str(math.ceil(decision.retry_after))},
            )

        response = await call_next(request)
        if decision.limit:
            response.headers["RateLimit-Limit"] = str(decision.limit)
            response.headers["RateLimit-Remaining"] = str(decision.remaining)
        return response


def _add_access_log(app: FastAPI, short: bool) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.monotonic()
        response = await call_next(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        if short:
            access_logger.info("%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms)
        else:
            client_ip = request.client.host if request.client else "-"
            target = request.url.path + (f"?{request.url.query}" if request.url.query else "")
            access_logger.info(
                '%s "%s %s" %s %.1fms "%s"',
                client_ip,
                request.method,
                target,
                response.status_code,
                elapsed_ms,
                request.headers.get("user-agent", "-"),
            )
        return response


def _add_exception_handlers(app: FastAPI, error_handler: ErrorHandler) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown paths and known paths with the wrong method both read as "no such route".
        if exc.status_code in (404, 405):
            error: ProxyError = NotFoundError("Route not found")
        else:
            error = ProxyError(str(exc.detail), status=exc.status_code)
        return JSONResponse(status_code=error.status, content=error_envelope(error))

    @app.exception_handler(ProxyError)
    async def proxy_error(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status, content=error_envelope(exc))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        envelope = error_handler.handle_exception(exc, context={"path": request.url.path})
        return JSONResponse(status_code=envelope["error"]["status"], content=envelope)


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[ResponseCache] = None,
    ygl_client: Optional[YGLClient] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """Build the proxy app. Collaborators default to ones built from ``settings``."""
    settings = settings or load_settings()

    app = FastAPI(
        title="YouGotListings Proxy API",
        description="Validated, cached proxy for the YouGotListings rentals, agents, landlords and leads API",
        version="1.0.0",
    )

    # ========================================================================
    # DEPENDENCY INJECTION
    # ========================================================================
    app.state.settings = settings
    app.state.cache = cache if cache is not None else ResponseCache(default_ttl=settings.cache_ttl_seconds)
    app.state.ygl_client = ygl_client or YGLClient(
        base_url=settings.ygl_base_url,
        timeout_seconds=settings.ygl_timeout_seconds,
        max_redirects=settings.ygl_max_redirects,
    )
    app.state.error_handler = ErrorHandler(log_unhandled=not settings.is_test)

    # Middleware added last runs first: CORS wraps the access log, which wraps the rate limit.
    _add_rate_limit(app, rate_limiter or RateLimiter(settings.rate_limit_per_minute))
    _add_access_log(app, short=settings.is_development)
    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # No allow-list: accept any origin and echo it back.
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    _add_exception_handlers(app, app.state.error_handler)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"ok": True}

    app.include_router(listings_api, prefix="/api")

    # Static widget (for embedding); mounted last so API routes win.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info("Static directory %s not found; static assets disabled", static_dir)

    return app


app = create_app()


def main() -> None:
    """Run the proxy with uvicorn on $PORT."""
    import uvicorn

    port = app.state.settings.port
    logger.info("YouGotListings Proxy API running on http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
