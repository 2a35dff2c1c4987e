"""
Course Planner API

FastAPI application for course analysis and pace planning.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courseplanner import __version__
from courseplanner.config import settings
from courseplanner.api.v1.router import api_router


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Course Planner API...")
    logger.info(
        f"Smoothing defaults: window={settings.grade_window_m}m, "
        f"step={settings.sample_step_m}m, pace={settings.pace_smoothing_m}m; "
        f"grade model: {settings.grade_model.value}"
    )

    yield

    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Course Planner API",
    description="Course analysis and pace planning for trail and road races",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "courseplanner.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
