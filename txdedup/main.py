"""Main FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .api.imports import router as imports_router
from .config import settings
from .health import get_health_status

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Transaction Dedup", version="1.0.0")
app.include_router(imports_router)


@app.get("/")
async def root():
    return {"message": "Duplicate detection running"}


@app.get("/health")
async def health():
    """Liveness probe - always returns OK if app is running."""
    return {"status": "ok"}


@app.get("/health/ready")
async def health_ready():
    """Readiness probe - checks the database."""
    status = await get_health_status()
    code = 200 if status["status"] == "healthy" else 503
    return JSONResponse(content=status, status_code=code)


@app.get("/health/full")
async def health_full():
    """Full health check with details."""
    return await get_health_status()
