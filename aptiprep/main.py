"""
Aptiprep Backend - FastAPI Application

Main entry point for the application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aptiprep.api.v1 import router as api_v1_router
from aptiprep.core.config import settings
from aptiprep.core.http_client import close_http_client
from aptiprep.core.store import close_document_store


logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    print(f"🚀 Starting Aptiprep Backend ({settings.DOCUMENT_STORE} store)...")
    yield
    # Shutdown
    print("🛑 Shutting down Aptiprep Backend...")
    await close_document_store()
    await close_http_client()


# Create FastAPI application
app = FastAPI(
    title="Aptiprep Backend",
    description="Aptitude test preparation platform: video progress tracking and admin access.",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Health status and environment info.
    """
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "document_store": settings.DOCUMENT_STORE,
        "version": "0.1.0",
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links.
    """
    return {
        "message": "Welcome to Aptiprep Backend API",
        "docs": "/docs",
        "health": "/health",
    }
