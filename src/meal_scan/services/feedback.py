"""Records derived from a reviewed scan: critical samples and staple templates."""

from meal_scan.domain.scans import (
    CriticalSample,
    FoodScan,
    ItemComposition,
    StapleMeal,
)


def compute_deviation_percent(ai_weight: float, user_weight: float) -> float:
    """Signed deviation of the user's weight from the model's, in percent.

    Positive when the user recorded more than the model estimated. Returns 0
    when there is no usable model estimate.
    """
    if ai_weight <= 0:
        return 0.0
    return (user_weight - ai_weight) / ai_weight * 100


def find_critical_samples(
    scan: FoodScan, threshold_percent: float, timestamp: int
) -> list[CriticalSample]:
    """Return a sample for each item whose correction reaches the threshold."""
    samples: list[CriticalSample] = []
    for item in scan.items:
        deviation = compute_deviation_percent(
            item.original_weight_grams, item.estimated_weight_grams
        )
        if item.original_weight_grams <= 0 or abs(deviation) < threshold_percent:
            continue
        samples.append(
            CriticalSample(
                timestamp=timestamp,
                image_url=scan.image_url,
                food_name=item.name,
                ai_weight=item.original_weight_grams,
                user_weight=item.estimated_weight_grams,
                deviation_percent=round(deviation, 1),
            )
        )
    return samples


def staple_from_scan(name: str, scan: FoodScan) -> StapleMeal:
    """Build a staple template from a scan's items."""
    items = [
        ItemComposition(
            name=item.name,
            estimated_weight_grams=item.estimated_weight_grams,
            original_weight_grams=item.original_weight_grams,
            nutrients=item.nutrients,
            consumed_percentage=item.consumed_percentage,
        )
        for item in scan.items
    ]
    total = sum(
        item.nutrients.calories * item.consumed_percentage / 100 for item in items
    )
    return StapleMeal(
        name=name,
        image_url=scan.image_url,
        items=items,
        total_calories=round(total * scan.global_scale / 100, 1),
    )
