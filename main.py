from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from core.config import settings
from core.logging_config import setup_logging

# Feature routes
from features.buoys.routes.buoy_routes import router as buoy_router
from features.pages.routes.page_routes import router as page_router

# Services and clients
from features.buoys.services.buoy_finder_service import BuoyFinderService
from features.buoys.services.ndbc_client import NDBCClient
from features.charts.services.chart_client import ChartClient

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("🚀 Starting Buoy Finder...")
    app.state.buoy_finder_service = BuoyFinderService(
        ndbc_client=NDBCClient(),
        chart_client=ChartClient()
    )
    logger.info("✨ Startup complete - ready to serve requests")
    try:
        yield
    finally:
        logger.info("🔄 Shutting down...")
        await app.state.buoy_finder_service.close()
        logger.info("👋 Shutdown complete")

app = FastAPI(
    title="Buoy Finder",
    description="Latest and historical NDBC buoy conditions by station or location",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(settings.resolve_dir(settings.static_dir))), name="static")

# Include feature routers
app.include_router(page_router)
app.include_router(buoy_router)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "time": datetime.now(timezone.utc).isoformat()
    }

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
        workers=1
    )
