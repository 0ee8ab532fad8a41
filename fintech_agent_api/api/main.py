"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from fintech_agent_api.api.dependencies import get_request_id
from fintech_agent_api.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fintech_agent_api.api.v1 import accounts, airtime, kyc, limits, loans, payments, responses, transactions
from fintech_agent_api.config import Settings, settings as default_settings
from fintech_agent_api.domain.exceptions import DomainException
from fintech_agent_api.domain.scoring import RandomScoringStrategy, ScoringStrategy
from fintech_agent_api.infrastructure.observability.logging import setup_logging
from fintech_agent_api.infrastructure.scheduler import DeferredTaskScheduler
from fintech_agent_api.infrastructure.seed import seed_demo_data
from fintech_agent_api.infrastructure.store import FintechStore
from fintech_agent_api.utils.date_utils import to_iso, utc_now

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    """Fold pydantic errors into one envelope message"""
    errors = exc.errors()
    missing = [str(err["loc"][-1]) for err in errors if err.get("type") == "missing" and len(err["loc"]) > 1]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    if any(err.get("type") == "missing" for err in errors):
        return "Request body is required"

    first = errors[0]
    field = ".".join(str(part) for part in first["loc"][1:]) or "body"
    return f"Invalid value for {field}: {first['msg']}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        request_id = get_request_id(request)
        logger.warning(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})
        return JSONResponse(status_code=exc.status_code, content=responses.error(request_id, str(exc)))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        request_id = get_request_id(request)
        message = _validation_message(exc)
        logger.warning(f"Invalid request: {message}", extra={"request_id": request_id})
        return JSONResponse(status_code=400, content=responses.error(request_id, message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content=responses.error(get_request_id(request), message))

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        request_id = get_request_id(request)
        logger.error(f"Unexpected error: {exc}", extra={"request_id": request_id}, exc_info=exc)
        return JSONResponse(status_code=500, content=responses.error(request_id, "Internal server error"))


def build_store(app_settings: Settings) -> FintechStore:
    store = FintechStore(
        kyc_validity_days=app_settings.kyc_validity_days,
        default_currency=app_settings.default_currency,
    )
    if app_settings.seed_demo_data:
        seed_demo_data(store)
    return store


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[FintechStore] = None,
    scoring: Optional[ScoringStrategy] = None,
) -> FastAPI:
    """Create and configure FastAPI application"""
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.service_name)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Fintech agent API started", extra={"port": app_settings.port})
        yield
        # Pending auto-completions die with the process
        app.state.scheduler.shutdown()

    app = FastAPI(
        title="Fintech Agent API",
        description="In-memory fintech resources with checker endpoints for workflow orchestration",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.store = store if store is not None else build_store(app_settings)
    app.state.scoring = scoring or RandomScoringStrategy(app_settings.credit_score_seed)
    app.state.scheduler = DeferredTaskScheduler()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check(request: Request):
        return {
            "status": "ok",
            "service": app_settings.service_name,
            "timestamp": to_iso(utc_now()),
            "requestId": get_request_id(request),
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
    app.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    app.include_router(payments.router, prefix="/payments", tags=["payments"])
    app.include_router(loans.router, prefix="/loans", tags=["loans"])
    app.include_router(airtime.router, prefix="/airtime", tags=["airtime"])
    app.include_router(kyc.router, prefix="/kyc", tags=["kyc"])
    app.include_router(limits.router, prefix="/limits", tags=["limits"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port"""
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
