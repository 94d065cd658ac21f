"""
API Models: Request and Response schemas
Using Pydantic for automatic validation and documentation
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


# ─── Request Models ───────────────────────────────────────────────────────────

class ProcessRequest(BaseModel):
    """One receipt's OCR text."""
    text: str = Field(..., description="Raw OCR text (may be empty or multi-line)")


class BatchProcessRequest(BaseModel):
    """Several independent receipts."""
    texts: List[str] = Field(..., description="Raw OCR texts", min_length=1, max_length=50)


# ─── Response Models ──────────────────────────────────────────────────────────

class ValidationItem(BaseModel):
    """Single validation outcome."""
    field: str
    success: bool
    message: str


class ProcessResponse(BaseModel):
    """Structured receipt data with confidence and validations."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": "success",
                "structuredData": {
                    "establishment": "SUPERMERCADO IDEAL LTDA",
                    "taxId": "23.456.789/0001-10",
                    "date": "2026-01-15",
                    "time": "16:41",
                    "items": [
                        {
                            "description": "Leite Integral",
                            "quantity": 2,
                            "unitPrice": 4.79,
                            "totalPrice": 9.58,
                            "correctionApplied": False,
                        }
                    ],
                    "totalValue": 17.48,
                    "paymentMethod": "Débito",
                },
                "confidence": 1.0,
                "confidenceLevel": "high",
                "validations": [
                    {"field": "taxId", "success": True, "message": "Valid tax ID: 23.456.789/0001-10"}
                ],
            }
        },
    )

    status: str = Field("success", description="Response status")
    structured_data: Dict[str, Any] = Field(..., alias="structuredData",
                                            description="Found fields only; absent fields are omitted")
    confidence: float = Field(..., description="Confidence score (0-1)", ge=0, le=1)
    confidence_level: str = Field(..., alias="confidenceLevel", description="'high' | 'medium' | 'low'")
    validations: List[ValidationItem] = Field(..., description="Ordered validation outcomes")


class BatchProcessResponse(BaseModel):
    """Batch processing response."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field("success", description="Overall status")
    total_receipts: int = Field(..., alias="totalReceipts")
    average_confidence: float = Field(..., alias="averageConfidence", ge=0, le=1)
    results: List[ProcessResponse] = Field(..., description="Individual results, in request order")


class PenaltiesResponse(BaseModel):
    """Active scoring policy."""
    model_config = ConfigDict(populate_by_name=True)

    penalties: Dict[str, float]
    consistency_tolerance: float = Field(..., alias="consistencyTolerance")


# ─── Health & Error Models ────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  = Field("healthy",               description="Health status")
    service: str = Field("receipt-text-api",      description="Service name")
    version: str = Field("1.0.0",                 description="API version")


class ErrorResponse(BaseModel):
    """Error response."""
    status: str           = Field("error", description="Response status")
    error: str            = Field(...,     description="Error type")
    message: str          = Field(...,     description="Error message")
    detail: Optional[str] = Field(None,    description="Additional details")
