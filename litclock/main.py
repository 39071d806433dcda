"""FastAPI application entry point.

Literary Clock - a quote for every minute of the day.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from litclock.routes import api_router
from litclock.routes.clock import ClockNotReady
from litclock.schemas import ErrorResponse
from litclock.services.clock import ClockState, NoQuoteForTime, resolve_timezone
from litclock.services.quote_store import QuoteStoreError, load_quotes
from litclock.services.render import load_template
from litclock.settings import Settings, get_settings
from litclock.stores.sqlite import close_db, init_db, ping_db

logger = logging.getLogger("uvicorn.error")


async def load_clock_state(settings: Settings) -> ClockState:
    """Read the quote table and build the index.

    Raises:
        ClockConfigError: unknown timezone.
        QuoteStoreError: database missing/unreadable or quotes malformed.
    """
    started = time.perf_counter()
    tz = resolve_timezone(settings.timezone)
    template = load_template(settings.template_path or None)
    try:
        await init_db(settings.read_only_database_url)
        await ping_db()
        quotes = await load_quotes()
        state = ClockState.from_quotes(quotes, template=template, tz=tz)
    except SQLAlchemyError as e:
        raise QuoteStoreError(f"Quote database unavailable: {e}") from e
    except ValueError as e:
        raise QuoteStoreError(f"Quote data rejected: {e}") from e
    finally:
        # Quotes are read once; nothing queries the database afterwards.
        await close_db()

    logger.info(
        f"Clock index built: {len(state.quotes)} quotes, "
        f"{len(state.index.populated_slots())} populated slots, "
        f"first slot {state.index.first_slot}, "
        f"{(time.perf_counter() - started) * 1000:.1f}ms"
    )
    return state


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the clock state before serving. Any failure aborts startup.
    """
    settings = get_settings()
    try:
        app.state.clock = await load_clock_state(settings)
    except Exception:
        logger.exception("Quote store load failed")
        raise

    yield

    app.state.clock = None


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Literary quotes for every minute of the day",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.clock = None

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=False,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    @app.exception_handler(NoQuoteForTime)
    async def no_quote_handler(request: Request, exc: NoQuoteForTime) -> JSONResponse:
        """Requested time precedes every stored quote."""
        return JSONResponse(
            status_code=404,
            content=ErrorResponse.build(
                "NO_QUOTE_FOR_TIME",
                str(exc),
                {"hour": exc.hour, "minute": exc.minute},
            ),
        )

    @app.exception_handler(ClockNotReady)
    async def not_ready_handler(request: Request, exc: ClockNotReady) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content=ErrorResponse.build("CLOCK_NOT_READY", str(exc)),
        )

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        return JSONResponse(
            status_code=500,
            content=ErrorResponse.build(
                "INTERNAL_ERROR",
                str(exc) if settings.debug else "Internal server error",
            ),
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check(request: Request) -> dict[str, bool | int]:
        """Health check endpoint."""
        state: ClockState | None = request.app.state.clock
        return {"ok": state is not None, "quotes": len(state.quotes) if state else 0}

    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "litclock.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
