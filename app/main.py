# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.config.database import init_db
from app.config.settings import settings
from app.core.error_handlers import register_error_handlers
from app.core.middleware import setup_middleware
from app.api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} starting, version {settings.version}")
    logger.info(f"Environment: {'development' if settings.debug else 'production'}")
    logger.info(f"Token expiry: {settings.access_token_expire_minutes} minutes")
    logger.info(f"Database: {settings.database_host}")

    if settings.auto_create_tables:
        init_db()

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Car dealership backend: inventory, customers, employees, sales and services",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

setup_middleware(app)
register_error_handlers(app)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": "Dealership API",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
