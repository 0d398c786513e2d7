"""
Sales Workflow API - Main Application.

FastAPI application with CORS enabled for the dashboard front-end.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title="Retail Sales Workflow API",
    description="Builds invoices, resolves payment plans and submits sales to the inventory service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# TODO: Restrict origins once the dashboard domain is fixed
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "sales-workflow-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Retail Sales Workflow API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import catalog, debts, sales

app.include_router(catalog.router, prefix="/api/v1", tags=["Catalog"])
app.include_router(sales.router, prefix="/api/v1", tags=["Sales"])
app.include_router(debts.router, prefix="/api/v1", tags=["Debts"])
