# File: main.py

from contextlib import asynccontextmanager

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration

from api.middleware.error_middleware import ErrorLoggingMiddleware
from api.middleware.rate_limit_middleware import RateLimitMiddleware
from api.routers.all_endpoints import all_routers
from common.config.settings import settings
from common.exceptions.exception_handlers import register_exception_handlers
from common.logging.logger import log_info, log_error
from infrastructure.database.mongodb.connection import MongoDBConnection
from infrastructure.database.redis.redis_client import init_redis_pool, close_redis_pool
from infrastructure.setup.initial_setup import run_initial_setup

# Load environment variables
load_dotenv()

# Initialize Sentry
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        environment=settings.ENVIRONMENT,
        send_default_pii=settings.SENTRY_SEND_PII
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup tasks
    try:
        db = await MongoDBConnection.connect()
        await run_initial_setup(db)

        if settings.RATE_LIMIT_ENABLED:
            await init_redis_pool()

        log_info("Registered routes", extra={"routes": [route.path for route in app.routes]})
        log_info("Moger Mulluk API started", extra={"version": app.version, "environment": settings.ENVIRONMENT})
    except Exception as e:
        log_error("Startup failed", extra={"error": str(e)})
        sentry_sdk.capture_exception(e)
        raise

    yield  # Application is running

    # Shutdown tasks
    await MongoDBConnection.disconnect()
    if settings.RATE_LIMIT_ENABLED:
        await close_redis_pool()
    log_info("Moger Mulluk API stopped")


def create_app() -> FastAPI:
    application = FastAPI(
        title="Moger Mulluk API",
        version="2.0.0",
        description="Multilingual menu catalog, FAQ, pages, languages and media for the Moger Mulluk tea house.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # Request logger middleware
    @application.middleware("http")
    async def log_requests(request: Request, call_next):
        log_info("Incoming request", extra={"method": request.method, "url": str(request.url)})
        return await call_next(request)

    # Register middlewares
    application.add_middleware(ErrorLoggingMiddleware)
    if settings.RATE_LIMIT_ENABLED:
        application.add_middleware(RateLimitMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    register_exception_handlers(application)

    # Register routers
    application.include_router(all_routers)
    return application


app = create_app()
