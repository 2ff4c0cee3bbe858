"""
FastAPI Application Factory

Assembles the app:
- Routes (alarm triggers, schedules, system)
- Exception handlers
- CORS for the web UI

The factory is used by main_asyncio.py and by the tests, which install
their own ServiceContainer through api.dependencies.
"""

from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from api.routes import alarm, schedules, system
from api.middleware.error_handler import register_exception_handlers
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


def create_app(
    title: str = "Sunrise Light",
    description: str = "Wake-up light: sunrise alarm, schedules and diagnostics",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None,
    static_dir: Optional[str] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: all)
        static_dir: Web UI directory, mounted at /static with index.html at /
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    log.debug(f"Creating FastAPI app: {title} v{version}")

    # =========================================================================
    # CORS Configuration
    # =========================================================================
    # The web UI is usually opened from a phone on the LAN.

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    app.include_router(alarm.router, prefix="/api")
    app.include_router(schedules.router, prefix="/api")
    app.include_router(system.router, prefix="/api")

    log.debug("Routes registered: alarm (/api), schedules (/api/schedules), system (/api/system)")

    # =========================================================================
    # Health Check Endpoint
    # =========================================================================

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        """Simple health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "service": "sunrise-light-api",
            "version": version
        }

    ui_dir = Path(static_dir) if static_dir else None
    if ui_dir is not None and not ui_dir.is_dir():
        log.warn("Web UI directory not found, serving API only", static_dir=str(ui_dir))
        ui_dir = None

    if ui_dir is not None:
        app.mount("/static", StaticFiles(directory=ui_dir), name="static")
        log.debug(f"Web UI mounted from {ui_dir}")

    @app.get("/", include_in_schema=False)
    async def root():
        if ui_dir is not None and (ui_dir / "index.html").is_file():
            return FileResponse(ui_dir / "index.html")
        return JSONResponse(
            {
                "message": title,
                "docs": "/docs" if docs_enabled else None,
                "health": "/api/health"
            }
        )

    return app
