"""Bulk Mailer API.

FastAPI application providing endpoints for bulk email relay:
- POST /api/login: Exchange username/password for a bearer token
- POST /api/send-email: Send one email to up to 25 BCC recipients
- GET /api/health: Service health check
- GET /api/server-info: Host and network information

Security features:
- Bearer token authentication on send-email
- Structured error codes instead of raw transport errors
- Catch-all handler that never leaks internals

Author: Odiseo
Version: 1.0.0
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bulk_mailer.api.schemas import (
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    LoginResponse,
    SendEmailResponse,
    ServerInfoResponse,
)
from bulk_mailer.auth import AuthService, CredentialStore, TokenService
from bulk_mailer.clients.network import NetworkInspector
from bulk_mailer.clients.smtp import SMTPClient
from bulk_mailer.config import MailerConfig
from bulk_mailer.core.exceptions import (
    AuthorizationError,
    MailerError,
    TransportError,
    ValidationError,
)
from bulk_mailer.core.logger import get_logger, reset_banner, setup_logging
from bulk_mailer.models.auth import TokenClaims
from bulk_mailer.services.mailer import BulkMailer, TransportFactory
from bulk_mailer.services.server_info import ServerInfoReporter
from bulk_mailer.services.validator import validate_send_request

logger = get_logger(__name__)


# =============================================================================
# Application State (Dependency Injection)
# =============================================================================
@dataclass
class AppState:
    """Application state container for dependency injection."""

    config: MailerConfig
    tokens: TokenService
    auth_service: AuthService
    mailer: BulkMailer
    reporter: ServerInfoReporter


app_state: AppState | None = None


def build_state(
    config: MailerConfig,
    transport_factory: TransportFactory = SMTPClient,
    inspector: NetworkInspector | None = None,
) -> AppState:
    """Wire the service components from configuration."""
    tokens = TokenService(
        secret=config.JWT_SECRET,
        algorithm=config.JWT_ALGORITHM,
        expire_hours=config.TOKEN_EXPIRE_HOURS,
    )
    return AppState(
        config=config,
        tokens=tokens,
        auth_service=AuthService(
            store=CredentialStore(config.AUTH_USERS),
            tokens=tokens,
            expires_in=config.token_expires_in,
        ),
        mailer=BulkMailer(config, transport_factory=transport_factory),
        reporter=ServerInfoReporter(port=config.PORT, inspector=inspector),
    )


def get_state() -> AppState:
    """Dependency: Get the initialized application state."""
    if not app_state:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return app_state


def get_config(state: Annotated[AppState, Depends(get_state)]) -> MailerConfig:
    """Dependency: Get application configuration."""
    return state.config


def get_token_service(state: Annotated[AppState, Depends(get_state)]) -> TokenService:
    """Dependency: Get the token service."""
    return state.tokens


def get_auth_service(state: Annotated[AppState, Depends(get_state)]) -> AuthService:
    """Dependency: Get the login service."""
    return state.auth_service


def get_mailer(state: Annotated[AppState, Depends(get_state)]) -> BulkMailer:
    """Dependency: Get the bulk send orchestrator."""
    return state.mailer


def get_reporter(state: Annotated[AppState, Depends(get_state)]) -> ServerInfoReporter:
    """Dependency: Get the server info reporter."""
    return state.reporter


# =============================================================================
# Bearer Token Authentication
# =============================================================================
async def require_token(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenClaims:
    """Verify the Authorization header and return the caller's claims.

    Raises NoTokenError (401) when the header or token is missing and
    InvalidTokenError (403) when the token does not verify.
    """
    return tokens.verify_header(authorization)


async def read_json_object(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object.

    Raises:
        ValidationError: If the body is not valid JSON or not an object.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        logger.debug(f"Rejected request body on {request.url.path}: {e}")
        raise ValidationError() from e
    if not isinstance(payload, dict):
        raise ValidationError()
    return payload


# =============================================================================
# API Endpoints
# =============================================================================
router = APIRouter(prefix="/api")


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed body"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    credentials: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """Exchange a username/password pair for a bearer token."""
    result = auth_service.login(credentials.username, credentials.password)
    return LoginResponse(success=True, message="Login successful", data=result)


@router.post(
    "/send-email",
    response_model=SendEmailResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Missing token or SMTP auth failed"},
        403: {"model": ErrorResponse, "description": "Invalid token"},
        500: {"model": ErrorResponse, "description": "Delivery failed"},
        503: {"model": ErrorResponse, "description": "SMTP relay unreachable"},
    },
)
async def send_email(
    request: Request,
    claims: Annotated[TokenClaims, Depends(require_token)],
    mailer: Annotated[BulkMailer, Depends(get_mailer)],
    config: Annotated[MailerConfig, Depends(get_config)],
) -> SendEmailResponse:
    """Send one HTML email to every recipient via BCC.

    Requires a bearer token from /api/login. The sender's app password is
    used for this single delivery and never stored.
    """
    # Parsed after the token check: unauthenticated callers never see body errors
    payload = await read_json_object(request)
    send_request = validate_send_request(payload, max_recipients=config.MAX_RECIPIENTS)
    result = await mailer.send_bulk_email(send_request, claims.username)
    return SendEmailResponse(success=True, message="Email sent successfully", data=result)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    No authentication required - used by load balancers and monitoring.
    """
    return HealthResponse(success=True, message="Email service is running")


@router.get(
    "/server-info",
    response_model=ServerInfoResponse,
    responses={500: {"model": ErrorResponse, "description": "Inspection failed"}},
)
async def server_info(
    reporter: Annotated[ServerInfoReporter, Depends(get_reporter)],
) -> ServerInfoResponse:
    """Report hostname, platform, IPv4 interfaces, URLs and uptime."""
    info = reporter.get_server_info()
    return ServerInfoResponse(
        success=True,
        message="Server information retrieved successfully",
        data=info,
    )


# =============================================================================
# Error Handling
# =============================================================================
def _error_response(
    status_code: int,
    message: str,
    error: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(application: FastAPI) -> None:
    """Render every failure with the standard error envelope."""

    @application.exception_handler(MailerError)
    async def mailer_error_handler(request: Request, exc: MailerError) -> JSONResponse:
        error = exc.code
        headers = None

        if isinstance(exc, TransportError) and exc.detail:
            expose = bool(app_state and app_state.config.EXPOSE_ERROR_DETAILS)
            if expose and exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
                error = exc.detail
        if isinstance(exc, AuthorizationError) and exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _error_response(exc.status_code, exc.message, error, headers)

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request body",
            "INVALID_REQUEST",
        )

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths are both "not found"
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error_response(status.HTTP_404_NOT_FOUND, "Route not found")
        return _error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @application.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Something went wrong!",
        )


# =============================================================================
# Module-level Configuration
# =============================================================================
_config = MailerConfig()


# =============================================================================
# Lifespan Context Manager
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    global app_state  # noqa: PLW0603

    setup_logging(
        log_dir=_config.LOG_DIR,
        log_level=_config.LOG_LEVEL,
        enable_file=_config.LOG_TO_FILE,
        max_size_mb=_config.LOG_MAX_SIZE_MB,
        backup_count=_config.LOG_BACKUP_COUNT,
        settings=_config,
    )

    if _config.uses_default_secret:
        logger.warning("JWT_SECRET is not set; tokens are signed with the built-in default secret")
    logger.info(f"Environment: {_config.ENVIRONMENT}")

    app_state = build_state(_config)
    for line in app_state.reporter.startup_lines():
        logger.info(line)

    yield  # Application runs here

    logger.info(f"Shutting down {_config.SERVICE_NAME}...")
    app_state = None
    reset_banner()
    logger.info(f"{_config.SERVICE_NAME} stopped")


# =============================================================================
# FastAPI Application
# =============================================================================
def create_app(lifespan_handler=lifespan) -> FastAPI:
    """Create and configure FastAPI application."""
    application = FastAPI(
        title=_config.SERVICE_NAME,
        description="Authenticated bulk email relay over SMTP",
        version=_config.SERVICE_VERSION,
        lifespan=lifespan_handler,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=_config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)
    application.include_router(router)

    return application


app = create_app()


# =============================================================================
# Entry Point
# =============================================================================
def run():
    """Run the API server."""
    import uvicorn

    logger.info(f"Starting {_config.SERVICE_NAME} on {_config.API_HOST}:{_config.PORT}")
    uvicorn.run(
        "bulk_mailer.api.main:app",
        host=_config.API_HOST,
        port=_config.PORT,
        reload=False,
    )


if __name__ == "__main__":
    run()
