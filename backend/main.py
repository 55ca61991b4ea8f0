"""WorldClock Celestial - FastAPI Backend Entry Point."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routers import celestial

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"

logger = logging.getLogger(__name__)


def cors_origins() -> list[str]:
    raw = os.environ.get("WORLDCLOCK_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("WorldClock Celestial starting up")
    yield
    logger.info("WorldClock Celestial shutting down")


app = FastAPI(
    title="WorldClock Celestial",
    description="Sun/Moon positions, sunrise/sunset and day/night terminator",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(celestial.router, prefix="/api/celestial", tags=["Celestial"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "WorldClock Celestial"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=True)
