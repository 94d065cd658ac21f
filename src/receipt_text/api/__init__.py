"""
API Package
Contains FastAPI routes and models
"""

from receipt_text.api.routes import router
from receipt_text.api.models import (
    ProcessRequest,
    ProcessResponse,
    BatchProcessRequest,
    BatchProcessResponse,
    PenaltiesResponse,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    'router',
    'ProcessRequest',
    'ProcessResponse',
    'BatchProcessRequest',
    'BatchProcessResponse',
    'PenaltiesResponse',
    'HealthResponse',
    'ErrorResponse'
]
