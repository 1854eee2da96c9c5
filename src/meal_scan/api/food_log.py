"""Meal history, staple and critical sample endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from meal_scan.api.dependencies import get_container, get_food_log_service
from meal_scan.api.schemas import (
    CreatedResponse,
    CriticalSampleInput,
    CriticalSampleModel,
    DeleteResponse,
    FoodScanInput,
    FoodScanModel,
    SaveMealResponse,
    StapleFromMealRequest,
    StapleMealInput,
    StapleMealModel,
)
from meal_scan.services.feedback import staple_from_scan
from meal_scan.services.food_log import FoodLogService

_logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/meals", status_code=status.HTTP_201_CREATED, tags=["meals"])
def save_meal(
    body: FoodScanInput,
    request: Request,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> SaveMealResponse:
    """Save a reviewed meal and record items corrected beyond the threshold.

    The meal is committed first. Sample recording is best effort: a failure
    is logged and the response lists no samples, so clients never retry a
    meal that was already stored.
    """
    threshold = get_container(request).settings.critical_deviation_threshold_percent
    scan = body.to_domain()
    meal_id = food_log.save_meal(scan)
    try:
        samples = food_log.record_critical_samples(scan, threshold)
    except Exception:
        _logger.exception("Failed to record critical samples: meal_id=%s", meal_id)
        samples = []
    return SaveMealResponse(
        id=meal_id,
        critical_samples=[CriticalSampleModel.from_domain(s) for s in samples],
    )


@router.get("/meals", tags=["meals"])
def list_meals(
    food_log: FoodLogService = Depends(get_food_log_service),
) -> list[FoodScanModel]:
    """Return the caller's recent meals, newest first."""
    return [FoodScanModel.from_domain(scan) for scan in food_log.fetch_meals()]


@router.delete("/meals/{meal_id}", tags=["meals"])
def delete_meal(
    meal_id: UUID,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> DeleteResponse:
    """Delete one of the caller's meals."""
    return DeleteResponse(deleted=food_log.delete_meal(meal_id))


@router.post("/staples", status_code=status.HTTP_201_CREATED, tags=["staples"])
def save_staple(
    body: StapleMealInput,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> StapleMealModel:
    """Save a staple meal template."""
    return StapleMealModel.from_domain(food_log.save_staple(body.to_domain()))


@router.post(
    "/staples/from-meal", status_code=status.HTTP_201_CREATED, tags=["staples"]
)
def save_staple_from_meal(
    body: StapleFromMealRequest,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> StapleMealModel:
    """Save a staple template built from a reviewed meal."""
    staple = staple_from_scan(body.name, body.meal.to_domain())
    return StapleMealModel.from_domain(food_log.save_staple(staple))


@router.get("/staples", tags=["staples"])
def list_staples(
    food_log: FoodLogService = Depends(get_food_log_service),
) -> list[StapleMealModel]:
    """Return the caller's staple meals, newest first."""
    return [StapleMealModel.from_domain(s) for s in food_log.fetch_staples()]


@router.post(
    "/critical-samples", status_code=status.HTTP_201_CREATED, tags=["samples"]
)
def save_critical_sample(
    body: CriticalSampleInput,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> CreatedResponse:
    """Save a critical sample."""
    return CreatedResponse(id=food_log.save_critical_sample(body.to_domain()))


@router.get("/critical-samples", tags=["samples"])
def list_critical_samples(
    food_log: FoodLogService = Depends(get_food_log_service),
) -> list[CriticalSampleModel]:
    """Return the caller's critical samples, newest first."""
    return [
        CriticalSampleModel.from_domain(sample)
        for sample in food_log.fetch_critical_samples()
    ]


@router.delete("/critical-samples/{sample_id}", tags=["samples"])
def delete_critical_sample(
    sample_id: UUID,
    food_log: FoodLogService = Depends(get_food_log_service),
) -> DeleteResponse:
    """Delete one of the caller's critical samples."""
    return DeleteResponse(deleted=food_log.delete_critical_sample(sample_id))
