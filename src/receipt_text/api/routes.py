"""
API Routes - All API endpoints
Thin HTTP layer over ReceiptProcessor; no extraction logic lives here
"""

from fastapi import APIRouter, HTTPException

from receipt_text.api.models import (
    BatchProcessRequest,
    BatchProcessResponse,
    ErrorResponse,
    PenaltiesResponse,
    ProcessRequest,
    ProcessResponse,
)
from receipt_text.models import ProcessedResult
from receipt_text.receipt_processor import get_processor
from loguru import logger

# Create router
router = APIRouter()


# ==================== UTILITY FUNCTIONS ====================

def to_response(result: ProcessedResult) -> ProcessResponse:
    """Convert a pipeline result into the API response shape"""
    payload = result.to_dict()
    return ProcessResponse(
        status="success",
        structured_data=payload["structuredData"],
        confidence=payload["confidence"],
        confidence_level=get_processor().confidence_level(result.confidence),
        validations=payload["validations"],
    )


# ==================== API ENDPOINTS ====================

@router.post(
    "/receipts/process",
    response_model=ProcessResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Receipts"],
)
async def process_receipt(request: ProcessRequest):
    """
    **Extract structured data from one receipt text**

    **Returns:**
    - Found fields only (establishment, taxId, date, time, items, ...)
    - Confidence score and level
    - Ordered validation outcomes

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/receipts/process \\
      -H "Content-Type: application/json" \\
      -d '{"text": "SUPERMERCADO IDEAL LTDA\\nTOTAL R$ 17,48"}'
    ```
    """
    try:
        result = get_processor().process(request.text)
        return to_response(result)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error processing receipt: {e}")
        logger.exception("Full traceback:")
        raise HTTPException(500, str(e))


@router.post(
    "/receipts/batch",
    response_model=BatchProcessResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Receipts"],
)
async def process_batch(request: BatchProcessRequest):
    """
    **Batch process multiple separate receipts**

    Each text is processed independently; results keep request order.
    """
    try:
        processor = get_processor()
        results = [to_response(processor.process(text)) for text in request.texts]
        average = sum(r.confidence for r in results) / len(results)

        logger.info(f"Batch processed: {len(results)} receipts, avg confidence {average:.2f}")

        return BatchProcessResponse(
            status="success",
            total_receipts=len(results),
            average_confidence=round(average, 2),
            results=results,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Batch error: {e}")
        raise HTTPException(500, str(e))


@router.get("/scoring/penalties", response_model=PenaltiesResponse, tags=["Scoring"])
async def get_penalties():
    """**Active penalty table and consistency tolerance**"""
    processor = get_processor()
    return PenaltiesResponse(
        penalties=processor.scorer.as_dict(),
        consistency_tolerance=processor.tolerance,
    )
