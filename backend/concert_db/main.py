"""
Random Concert API - Main Application Entry Point

Serves random concert links out of a Firebase Realtime Database:
- CRUD helpers over concerts/links, concerts/concerts_count and concerts/revid
- Atomic counter increments through Firebase transactions
- Structured logging with request correlation
- Prometheus metrics for every database call
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from concert_db.core.config import get_settings
from concert_db.core.logging import setup_logging, get_logger
from concert_db.core.metrics import metrics_endpoint
from concert_db.api.router import api_router
from concert_db.api.middleware import RequestLoggingMiddleware
from concert_db.api.error_handlers import register_error_handlers
from concert_db.infrastructure.firebase_client import FirebaseClient

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Fails fast with ConfigurationError when credentials are missing
    FirebaseClient.get_app()

    yield

    FirebaseClient.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Random concert links backed by Firebase Realtime Database",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_error_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "firebase": "initialized" if FirebaseClient.is_initialized() else "not_initialized",
    }


@app.get("/metrics", tags=["Health"])
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
