"""
Receipt Text API - Main Application
FastAPI application for turning OCR receipt text into structured data

Run with: python main.py
Access API docs at: http://localhost:8000/docs
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from receipt_text import __version__
from receipt_text.api.models import HealthResponse
from receipt_text.api.routes import router

# Create FastAPI app
app = FastAPI(
    title="Receipt Text API",
    description="Extract and validate structured data from OCR receipt text",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router, prefix="/api/v1")


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": "Receipt Text API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return HealthResponse(version=__version__)


if __name__ == "__main__":
    import uvicorn
    from receipt_text.utils import load_config, setup_logging

    log_config = load_config().get('logging', {})
    setup_logging(log_config.get('log_file'), log_config.get('level', 'INFO'))

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
