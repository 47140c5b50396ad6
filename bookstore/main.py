"""
FastAPI application factory. No business logic; only wiring, middleware and error rendering.

  uvicorn --factory bookstore.main:create_app
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.api import router as api_router
from bookstore.core.config import Settings, get_settings
from bookstore.core.database import build_engine, build_session_factory
from bookstore.core.security import TokenService

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request body.", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    # ctx may hold exception instances that are not JSON serializable
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with its settings, database session factory and token service."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Bookstore API",
        version="1.0.0",
        description="Book catalog with JWT authentication and admin-gated writes.",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        """Liveness check."""
        return "Bookstore API is running"

    logger.info(
        "Bookstore API configured",
        extra={
            "app_env": settings.APP_ENV,
            "api_prefix": settings.API_PREFIX,
            "jwt_expire_minutes": settings.JWT_EXPIRE_MINUTES,
        },
    )
    return app
