"""
FastAPI application entry point for the campaign dashboard backend.

Configures logging, CORS and the database pool lifecycle, registers the API
routers, and starts the ASGI server when run directly.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campaign_backend import __version__
from campaign_backend.core.database import init_db, close_db
from campaign_backend.api.spend_optimization import router as spend_optimization_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize database connection pool

    On shutdown:
        - Close database connection pool
    """
    logger.info("Campaign dashboard API starting")
    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except Exception as e:
        # Keep serving; get_db_pool() retries the connection on the next campaign request
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Campaign dashboard API shutting down")
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


app = FastAPI(
    title="Campaign Dashboard API",
    version=__version__,
    description=(
        "FastAPI backend for the marketing-operations dashboard. "
        "Provides spend optimization recommendations from campaign "
        "stats history."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8080",  # Vite dev server
        "http://127.0.0.1:8080",  # Alternative localhost
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(spend_optimization_router)  # Has its own /spend-optimization prefix


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": "Campaign Dashboard API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "campaign_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
