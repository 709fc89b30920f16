"""
FastAPI entrypoint for the Yeogidot travel journal backend.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from app.core.config import settings
from app.core.exceptions import TravelJournalError
from app.core.utils import format_error
from app.api.router import api_router
import logging
import os

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Yeogidot API",
    description="Backend API for photo-based travel journals",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files directory
# This serves uploaded photos from app/static at /static URL path
static_dir = settings.UPLOAD_DIR
if os.path.exists(static_dir):
    app.mount(settings.STATIC_URL_PREFIX, StaticFiles(directory=static_dir), name="static")

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(TravelJournalError)
async def travel_journal_error_handler(request: Request, exc: TravelJournalError):
    """Turn domain errors into JSON error bodies."""
    logger.warning(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(exc.status_code, exc.error, exc.message)
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler for unexpected errors."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=format_error(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Yeogidot API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
