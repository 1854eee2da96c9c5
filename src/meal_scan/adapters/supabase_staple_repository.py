"""Supabase repository for staple meal templates."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_scan.domain.scans import ItemComposition, StapleMeal
from meal_scan.errors import StoreWriteError
from meal_scan.services.food_log import StapleRepository


@dataclass
class SupabaseStapleRepository(StapleRepository):
    """Supabase implementation for staple meals."""

    client: Client

    def create_staple(self, user_id: UUID, staple: StapleMeal) -> StapleMeal:
        """Create a staple row and return it as stored."""
        response = (
            self.client.table("staple_meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": staple.name,
                    "image_url": staple.image_url,
                    "total_calories": staple.total_calories,
                    "items": [item.to_dict() for item in staple.items],
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreWriteError("Failed to create staple meal")
        return _parse_staple(response.data[0])

    def list_staples(self, user_id: UUID) -> list[StapleMeal]:
        """Return staples, most recently created first."""
        response = (
            self.client.table("staple_meals")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_staple(row) for row in response.data or []]


def _parse_staple(row: dict[str, object]) -> StapleMeal:
    items = row.get("items")
    return StapleMeal(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        image_url=str(row.get("image_url") or ""),
        items=[
            ItemComposition.from_dict(item)
            for item in (items if isinstance(items, list) else [])
            if isinstance(item, dict)
        ],
        total_calories=float(row.get("total_calories") or 0.0),
    )
