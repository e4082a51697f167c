"""
Content Planner API

FastAPI application that:
1. Researches keywords and analyzes competitors (mock data, cached in the DB)
2. Generates and manages content outlines
3. Generates on-page optimization suggestions and tracks their status
"""

import logging
import sys
from datetime import datetime

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

load_dotenv()

from contentplanner import __version__
from contentplanner.database import init_db, check_db_connection, get_db_info
from contentplanner.errors import NotFoundError, PersistenceError, ValidationError
from contentplanner.utils.config import get_settings

from api.keywords import router as keywords_router
from api.competitors import router as competitors_router
from api.outlines import router as outlines_router
from api.suggestions import router as suggestions_router

settings = get_settings()

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Content Planner",
    description="SEO content planning: keyword research, competitor analysis, outlines and on-page suggestions",
    version=__version__,
)

app.include_router(keywords_router)
app.include_router(competitors_router)
app.include_router(outlines_router)
app.include_router(suggestions_router)


# ============================================================================
# STARTUP - Initialize Database
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    logger.info("Initializing database...")
    init_db()
    if check_db_connection():
        logger.info("Database connection verified")
    else:
        logger.warning("Database connection check failed - continuing anyway")


# ============================================================================
# ERROR MAPPING
# ============================================================================

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# ============================================================================
# HEALTH
# ============================================================================

@app.get("/")
async def root():
    """Basic liveness probe."""
    return {"status": "ok", "service": "Content Planner"}


@app.get("/api/health")
async def health():
    """Detailed health check including database status."""
    db_connected = check_db_connection()

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "database": "connected" if db_connected else "disconnected",
    }


@app.get("/api/database")
async def database_status():
    """
    Get detailed database status.

    Returns:
        - Database type (postgresql/sqlite)
        - Connection status
        - Tables created
    """
    return get_db_info()


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
