import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import Database
from app.core.logging_config import setup_logging
from app.core.storage import LocalStorage
from app.api.endpoints import applications, health

logger = logging.getLogger(__name__)


def create_app(database: Optional[Database] = None, storage: Optional[LocalStorage] = None) -> FastAPI:
    """
    Build the API.

    Args:
        database: Persistence handle to use; created from settings at startup if omitted
        storage: Upload storage to use; defaults to settings.UPLOAD_DIR
    """
    storage = storage or LocalStorage(settings.UPLOAD_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Open the database at startup and dispose of its pool at shutdown.
        """
        logger.info("Starting up Job Application API...")
        app.state.database = database or Database.from_settings(settings)
        app.state.database.create_tables()
        logger.info("Database initialized successfully")

        yield

        logger.info("Shutting down Job Application API...")
        app.state.database.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Job application intake and review API",
        lifespan=lifespan
    )
    app.state.storage = storage

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(applications.router, prefix=settings.API_PREFIX)
    app.include_router(health.router)

    # Uploaded documents are served as-is
    app.mount(settings.UPLOADS_URL_PATH, StaticFiles(directory=storage.base_dir), name="uploads")

    @app.get("/")
    async def root():
        """Root endpoint - API health check"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "status": "healthy"
        }

    return app


setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level="info"
    )
