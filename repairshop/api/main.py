"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repairshop import __version__
from repairshop.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from repairshop.api.middleware.error_handler import setup_exception_handlers
from repairshop.api.routes import (
    budgets_router,
    health_router,
    invoices_router,
    orders_router,
    stock_router,
    warranties_router,
)
from repairshop.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Runs migrations and opens the connection pool on startup; closes the
    pool on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    from repairshop.infrastructure.storage.sqlite import close_pool, get_pool
    from repairshop.infrastructure.storage.sqlite.migrations import run_migrations

    try:
        await run_migrations()
        await get_pool()
        logger.info("database_ready", db_path=str(settings.storage.db_path))
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Repair Shop Engine API",
        description="Stock ledger, service order lifecycle and budget to invoice workflow",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(stock_router)
    app.include_router(orders_router)
    app.include_router(warranties_router)
    app.include_router(budgets_router)
    app.include_router(invoices_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "repairshop.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    run()
