"""
Receipt Models: structured result types returned by the pipeline
Using Pydantic so the same objects serialize straight into API responses

Every structured field is Optional. Absent fields are None on the model
and are dropped from to_dict(), so callers never see null markers.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ExtractionResult(NamedTuple):
    """Output of a single field extractor."""
    value: Any = None
    formatted: Optional[str] = None
    correction_applied: bool = False


# ─── Structured data ──────────────────────────────────────────────────────────

class LineItem(BaseModel):
    """One purchased product/service entry."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str          = Field(...,   description="Item description")
    quantity: Union[int, str] = Field(...,   description="Quantity, or a quantity label such as '2k'")
    unit_price: Optional[float] = Field(None, alias="unitPrice", description="Unit price")
    total_price: float        = Field(...,   alias="totalPrice", description="Line total")
    correction_applied: bool  = Field(False, alias="correctionApplied", description="OCR repair applied")


class ServiceTax(BaseModel):
    """Service charge line ('Tx serv 10%  4.65')."""
    model_config = ConfigDict(frozen=True)

    percentage: int
    amount: float


class AdditionalInfo(BaseModel):
    """Ancillary fields found on some receipt types."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    service_tax: Optional[ServiceTax] = Field(None, alias="serviceTax")
    change: Optional[float]           = Field(None)
    table_number: Optional[str]       = Field(None, alias="tableNumber")
    fuel_volume: Optional[float]      = Field(None, alias="fuelVolume")
    price_per_unit: Optional[float]   = Field(None, alias="pricePerUnit")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class StructuredData(BaseModel):
    """Fields recovered from one receipt. Every field is optional."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    establishment: Optional[str]     = Field(None)
    tax_id: Optional[str]            = Field(None, alias="taxId")
    date: Optional[str]              = Field(None, description="YYYY-MM-DD")
    time: Optional[str]              = Field(None, description="HH:MM")
    items: Optional[List[LineItem]]  = Field(None)
    total_value: Optional[float]     = Field(None, alias="totalValue")
    total_is_approximate: Optional[bool] = Field(None, alias="totalIsApproximate")
    payment_method: Optional[str]    = Field(None, alias="paymentMethod")
    additional_info: Optional[AdditionalInfo] = Field(None, alias="additionalInfo")

    def to_dict(self) -> Dict[str, Any]:
        """camelCase mapping containing only the fields that were found."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ─── Validation / result ──────────────────────────────────────────────────────

class ValidationOutcome(BaseModel):
    """Pass/fail judgment for one field."""
    model_config = ConfigDict(frozen=True)

    field: str   = Field(..., description="Structured-data key the outcome refers to")
    success: bool
    message: str = Field(..., description="Human-readable explanation")


class ProcessedResult(BaseModel):
    """Sole output of the pipeline."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    structured_data: StructuredData = Field(..., alias="structuredData")
    confidence: float               = Field(..., ge=0, le=1)
    validations: List[ValidationOutcome] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "structuredData": self.structured_data.to_dict(),
            "confidence": self.confidence,
            "validations": [v.model_dump() for v in self.validations],
        }
