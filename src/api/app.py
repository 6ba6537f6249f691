import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
import src.domain  # noqa: F401  registers table models
from src.api.error import ClientError, client_error_handler
from src.api.routes import accounts, deposits, orders, sellers, webhooks, withdrawals

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.CREATE_TABLES_ON_STARTUP:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield

    app = FastAPI(
        title="Marketplace Settlement Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start_time = time.time()
            response = await call_next(request)
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms}ms)"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)

    for module in (accounts, deposits, withdrawals, orders, sellers):
        app.include_router(module.router, prefix=config.API_PREFIX)

    # Path is registered with the gateway as-is
    app.include_router(webhooks.router)

    return app
