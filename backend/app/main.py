"""
Fantasy Football Playoff Pool Simulator - FastAPI Application

Main entry point for the web API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import simulations_router, teams_router, scoring_router
from .core.config import CORS_ORIGINS, LOG_LEVEL, SIMULATION_COUNT, SIMULATION_TIMEOUT, SIMULATION_WORKERS


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting simulator API (simulations=%d, workers=%d, timeout=%.1fs)",
        SIMULATION_COUNT, SIMULATION_WORKERS, SIMULATION_TIMEOUT
    )
    yield
    # Shutdown


# Create FastAPI app
app = FastAPI(
    title="Fantasy Football Playoff Pool Simulator",
    description="Monte Carlo simulation to calculate final-standings probabilities for fantasy football playoff pools.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(simulations_router, prefix="/api")
app.include_router(teams_router, prefix="/api")
app.include_router(scoring_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Fantasy Football Playoff Pool Simulator API",
        "version": "1.0.0",
        "docs": "/api/docs",
        "health": "/api/health"
    }
