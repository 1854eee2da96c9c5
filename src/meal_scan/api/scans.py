"""Photo analysis and upload endpoints."""

import binascii

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from meal_scan.api.dependencies import get_container, get_food_log_service
from meal_scan.api.schemas import (
    AnalysisResponse,
    AnalyzeRequest,
    ImageUploadRequest,
    ImageUploadResponse,
)
from meal_scan.services.food_log import FoodLogService
from meal_scan.services.identity import require_user_id

router = APIRouter(tags=["scans"])


@router.post("/scans/analyze")
async def analyze_scan(
    body: AnalyzeRequest,
    request: Request,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> AnalysisResponse:
    """Analyze a food photo into items, description and insight."""
    await run_in_threadpool(require_user_id, food_log.identity)
    container = get_container(request)
    try:
        analysis = await container.vision_service.analyze(
            body.image, user_context=body.context, model=body.model
        )
    except binascii.Error as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Image payload is not valid base64",
        ) from exc
    return AnalysisResponse.from_domain(analysis)


@router.post("/images", status_code=status.HTTP_201_CREATED)
def upload_image(
    body: ImageUploadRequest,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> ImageUploadResponse:
    """Store a photo and return its public URL."""
    return ImageUploadResponse(url=food_log.upload_image(body.image))
