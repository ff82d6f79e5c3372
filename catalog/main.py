import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.api.v1.routes.admin import router as admin_router
from catalog.api.v1.routes.attractions import router as attractions_router
from catalog.api.v1.routes.auth import router as auth_router
from catalog.api.v1.routes.categories import router as categories_router
from catalog.api.v1.routes.health import router as health_router
from catalog.api.v1.schemas.common import ErrorResponse, FieldErrorSchema
from catalog.application.dto.auth_dto import RESET_TOKEN_INVALID_MESSAGE
from catalog.config import settings
from catalog.core.database_init import initialize_database
from catalog.domain.errors import (
    AccountLockedError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ResetError,
    StoreError,
    ValidationError,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    logger.info("Starting up application...")
    if not initialize_database():
        logger.error("Database initialization failed; requests needing the database will fail")

    yield

    # Shutdown
    logger.info("Shutting down application...")


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _request_field_error(error: dict) -> FieldErrorSchema:
    # loc starts with the request part ("body", "query", ...)
    location = [str(part) for part in error.get("loc", ())[1:]]
    value = None if error.get("type") == "missing" else error.get("input")
    return FieldErrorSchema(
        field=".".join(location) or "body",
        message=error.get("msg", "Invalid value"),
        value=jsonable_encoder(value),
    )


def register_exception_handlers(app: FastAPI):
    """Map domain errors to HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        payload = ErrorResponse(
            message="Validation error",
            errors=[_request_field_error(error) for error in exc.errors()],
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=payload.model_dump(by_alias=True),
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Validation error",
            errors=[error.to_dict() for error in exc.errors],
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(ResetError)
    async def reset_error_handler(request: Request, exc: ResetError):
        return _error(status.HTTP_400_BAD_REQUEST, RESET_TOKEN_INVALID_MESSAGE)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(AccountLockedError)
    async def account_locked_handler(request: Request, exc: AccountLockedError):
        return _error(status.HTTP_423_LOCKED, str(exc))

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return _error(status.HTTP_401_UNAUTHORIZED, str(exc))

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
        return _error(status.HTTP_403_FORBIDDEN, str(exc))


def create_app() -> FastAPI:
    """Create FastAPI application and include routers."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(attractions_router, prefix="/api")
    app.include_router(categories_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(health_router, prefix="/api")
    return app


app = create_app()
