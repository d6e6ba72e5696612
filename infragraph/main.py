"""
InfraGraph FastAPI application entry point.

Creates and configures the FastAPI app with:
- CORS middleware
- Security headers middleware
- API router (state parsing)
- Health check endpoint
- Startup / shutdown logging hooks
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from infragraph.api.v1.router import router as api_router
from infragraph.config import get_settings
from infragraph.core.logging import configure_logging, get_logger

# ── Constants ────────────────────────────────────────────────────────────────

_HEALTH_CHECK_PATH: str = "/health"

_SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), camera=(), microphone=()",
}


# ── Security Headers Middleware ──────────────────────────────────────────────

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that injects security-related HTTP response headers.

    Every outgoing response receives the headers defined in
    ``_SECURITY_HEADERS``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response: Response = await call_next(request)
        for header_name, header_value in _SECURITY_HEADERS.items():
            response.headers[header_name] = header_value
        return response


# ── Application Factory ─────────────────────────────────────────────────────

def create_app() -> FastAPI:
    """Build and return the configured FastAPI application instance.

    Returns:
        A fully configured ``FastAPI`` app ready to serve requests.
    """
    settings = get_settings()

    application = FastAPI(
        title=f"{settings.APP_NAME} API",
        description=(
            "Parse Terraform state files and return interactive graph data "
            "for infrastructure visualization."
        ),
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json",
    )

    # ── Middleware (order matters: outermost first) ───────────────────────

    application.add_middleware(SecurityHeadersMiddleware)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )

    # ── Routers ──────────────────────────────────────────────────────────

    application.include_router(api_router, prefix=settings.API_PREFIX)

    # ── Health Check ─────────────────────────────────────────────────────

    @application.get(
        _HEALTH_CHECK_PATH,
        tags=["health"],
        summary="Application health check",
        response_class=JSONResponse,
    )
    async def health_check() -> dict[str, Any]:
        """Return the current health status of the application.

        Returns:
            A JSON object with ``status``, ``app``, ``version`` and
            ``timestamp`` fields.
        """
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # ── Lifecycle Events ─────────────────────────────────────────────────

    @application.on_event("startup")
    async def on_startup() -> None:
        configure_logging()
        get_logger(__name__).info(
            "Application starting (upload limit %d bytes, redaction %s)",
            settings.MAX_UPLOAD_BYTES,
            "on" if settings.REDACT_SENSITIVE_ATTRIBUTES else "off",
            extra={"action": "startup", "target": settings.APP_NAME},
        )

    @application.on_event("shutdown")
    async def on_shutdown() -> None:
        get_logger(__name__).info(
            "Application shutting down",
            extra={"action": "shutdown", "target": settings.APP_NAME},
        )

    return application


# ── Module-Level App Instance ────────────────────────────────────────────────

app: FastAPI = create_app()
