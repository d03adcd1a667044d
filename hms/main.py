"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
import os
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging

from . import __version__
from .config import Settings, settings as default_settings
from .database import Store, get_store
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .patients.router import router as patients_router
from .appointments.router import router as appointments_router
from .lab.router import router as lab_router
from .emr.router import router as emr_router
from .telemedicine.router import router as telemedicine_router
from .auth.router import router as auth_router
from .metrics.router import router as metrics_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        store: Pre-built store; built from ``settings`` at startup when omitted

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings

    # Configure logging
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # An injected store belongs to the caller, which disposes it
        owned = store is None
        app.state.store = Store.from_settings(settings) if owned else store
        logger.info("🚀 Starting Hospital Management API...")
        if settings.create_tables:
            app.state.store.create_all()
        try:
            yield
        finally:
            if owned:
                app.state.store.dispose()
            logger.info("Hospital Management API stopped")

    app = FastAPI(
        title="Hospital Management API",
        description="API for patients, appointments, lab records, EMR and telemedicine",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings

    # Register exception handlers
    register_exception_handlers(app)

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware
    setup_middlewares(app)

    # Include routers
    app.include_router(patients_router, prefix="/api/patients", tags=["Patients"])
    app.include_router(appointments_router, prefix="/api/appointments", tags=["Appointments"])
    app.include_router(lab_router, prefix="/api/lab", tags=["Lab & Imaging"])
    app.include_router(emr_router, prefix="/api/emr", tags=["EMR"])
    app.include_router(telemedicine_router, prefix="/api/telemedicine", tags=["Telemedicine"])
    app.include_router(metrics_router, prefix="/metrics")
    app.include_router(auth_router)

    # Root endpoint
    @app.get("/")
    def root():
        """
        Root endpoint for API health check.

        Returns:
            dict: Welcome message and version
        """
        return {"message": "Welcome to Hospital Management API", "version": __version__}

    # Health check endpoint
    @app.get("/health")
    async def health_check(store: Store = Depends(get_store)):
        """
        Health check endpoint for monitoring.

        Returns:
            dict: Health status information
        """
        connected = store.ping()
        return {
            "status": "healthy" if connected else "degraded",
            "database": "connected" if connected else "unavailable"
        }

    # Frontend files are served last so the API routes take precedence
    if settings.static_dir:
        if os.path.isdir(settings.static_dir):
            app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        else:
            logger.warning(f"Static directory {settings.static_dir} not found; not serving frontend")

    return app


app = create_app()
