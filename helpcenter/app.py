"""
FastAPI application entry point for the help center backend.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpcenter.config import get_settings
from helpcenter.errors import register_error_handlers
from helpcenter.routes import router
from helpcenter.schemas import HealthResponse
from helpcenter.store import utc_now_iso


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Help Center Backend", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", timestamp=utc_now_iso())

    register_error_handlers(app)
    return app


app = create_app()
