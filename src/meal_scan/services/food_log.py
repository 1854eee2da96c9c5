"""Owner-scoped persistence for scans, staples and critical samples."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from meal_scan.domain.scans import CriticalSample, FoodItem, FoodScan, StapleMeal
from meal_scan.errors import ImageUploadError
from meal_scan.services.feedback import find_critical_samples
from meal_scan.services.identity import IdentityResolver, require_user_id
from meal_scan.services.images import JPEG_MIME_TYPE, decode_image_payload

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and their items."""

    def create_meal(self, user_id: UUID, scan: FoodScan) -> UUID:
        """Create a meal row and return its id."""

    def create_meal_items(
        self, user_id: UUID, meal_id: UUID, items: list[FoodItem]
    ) -> None:
        """Create item rows for a meal."""

    def list_meals(self, user_id: UUID, limit: int) -> list[FoodScan]:
        """Return the user's meals with items, newest first."""

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> int:
        """Delete a meal owned by the user and return rows affected."""


class StapleRepository(Protocol):
    """Persistence interface for staple meal templates."""

    def create_staple(self, user_id: UUID, staple: StapleMeal) -> StapleMeal:
        """Create a staple row and return it with its id."""

    def list_staples(self, user_id: UUID) -> list[StapleMeal]:
        """Return the user's staples, newest first."""


class CriticalSampleRepository(Protocol):
    """Persistence interface for critical samples."""

    def create_sample(self, user_id: UUID, sample: CriticalSample) -> UUID:
        """Create a sample row and return its id."""

    def list_samples(self, user_id: UUID) -> list[CriticalSample]:
        """Return the user's samples, newest first."""

    def delete_sample(self, user_id: UUID, sample_id: UUID) -> int:
        """Delete a sample owned by the user and return rows affected."""


class ImageStore(Protocol):
    """Interface for public image object storage."""

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under a new key and return the stored path."""

    def public_url(self, path: str) -> str:
        """Return a publicly fetchable URL for a stored path."""


@dataclass
class FoodLogService:
    """Application service scoping every operation to the signed-in user."""

    identity: IdentityResolver
    meals: MealRepository
    staples: StapleRepository
    samples: CriticalSampleRepository
    images: ImageStore
    history_limit: int = 50

    def upload_image(self, image: bytes | str) -> str:
        """Store a photo and return its public URL."""
        require_user_id(self.identity)
        try:
            data = decode_image_payload(image)
            path = self.images.upload(
                f"food_{now_ms()}_{uuid4().hex[:8]}.jpg", data, JPEG_MIME_TYPE
            )
            return self.images.public_url(path)
        except Exception as exc:
            _logger.exception("Image upload failed")
            raise ImageUploadError() from exc

    def save_meal(self, scan: FoodScan) -> UUID:
        """Persist a meal and its items and return the meal id.

        The meal row and the item rows are written in two calls. If the
        second call fails the meal row stays behind without items and the
        error is raised to the caller.
        """
        user_id = require_user_id(self.identity)
        meal_id = self.meals.create_meal(user_id, scan)
        if scan.items:
            self.meals.create_meal_items(user_id, meal_id, scan.items)
        _logger.info("Saved meal: meal_id=%s items=%s", meal_id, len(scan.items))
        return meal_id

    def fetch_meals(self) -> list[FoodScan]:
        """Return the caller's most recent meals."""
        user_id = require_user_id(self.identity)
        return self.meals.list_meals(user_id, self.history_limit)

    def delete_meal(self, meal_id: UUID) -> int:
        """Delete one of the caller's meals."""
        user_id = require_user_id(self.identity)
        return self.meals.delete_meal(user_id, meal_id)

    def save_staple(self, staple: StapleMeal) -> StapleMeal:
        """Persist a staple meal template."""
        user_id = require_user_id(self.identity)
        return self.staples.create_staple(user_id, staple)

    def fetch_staples(self) -> list[StapleMeal]:
        """Return the caller's staple meals."""
        user_id = require_user_id(self.identity)
        return self.staples.list_staples(user_id)

    def save_critical_sample(self, sample: CriticalSample) -> UUID:
        """Persist a critical sample."""
        user_id = require_user_id(self.identity)
        return self.samples.create_sample(user_id, sample)

    def fetch_critical_samples(self) -> list[CriticalSample]:
        """Return the caller's critical samples."""
        user_id = require_user_id(self.identity)
        return self.samples.list_samples(user_id)

    def delete_critical_sample(self, sample_id: UUID) -> int:
        """Delete one of the caller's critical samples."""
        user_id = require_user_id(self.identity)
        return self.samples.delete_sample(user_id, sample_id)

    def record_critical_samples(
        self, scan: FoodScan, threshold_percent: float
    ) -> list[CriticalSample]:
        """Persist a sample for each item corrected beyond the threshold."""
        user_id = require_user_id(self.identity)
        saved: list[CriticalSample] = []
        for sample in find_critical_samples(scan, threshold_percent, now_ms()):
            sample_id = self.samples.create_sample(user_id, sample)
            saved.append(replace(sample, id=sample_id))
        return saved


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return int(datetime.now(tz=UTC).timestamp() * 1000)
