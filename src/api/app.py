import logging
from contextlib import asynccontextmanager
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from src.api.error import register_exception_handlers
from src.api.middleware import RequestLoggingMiddleware
from src.api.routes import erp_config
from src.api.routes import customers, dashboard, invoices
from src.depends import engine
from src.app.controllers.dashboard_controller import DashboardController

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    """
    Build the receivables dashboard API

    Args:
        config: ApplicationConfig (or any object with the same attributes)

    Returns:
        Configured FastAPI application with a fresh DashboardController
    """
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)
        logger.info("Sentry error reporting enabled")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(
        title="Receivables Dashboard",
        description="Open invoices from Priority ERP with collection remarks",
        lifespan=lifespan,
    )
    app.state.controller = DashboardController()

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(dashboard.router)
    app.include_router(invoices.router)
    app.include_router(customers.router)
    app.include_router(erp_config.router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
