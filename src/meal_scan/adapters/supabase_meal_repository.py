"""Supabase repository for meals and meal items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_scan.domain.scans import FoodItem, FoodScan, Nutrients
from meal_scan.errors import StoreWriteError
from meal_scan.services.food_log import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(self, user_id: UUID, scan: FoodScan) -> UUID:
        """Create a meal row and return its id."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "timestamp": scan.timestamp,
                    "description": scan.description,
                    "insight": scan.insight,
                    "image_url": scan.image_url,
                    "global_scale": scan.global_scale,
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreWriteError("Failed to create meal")
        return UUID(str(response.data[0]["id"]))

    def create_meal_items(
        self, user_id: UUID, meal_id: UUID, items: list[FoodItem]
    ) -> None:
        """Create item rows tagged with the meal and owner."""
        payload = [
            {
                "user_id": str(user_id),
                "meal_id": str(meal_id),
                "name": item.name,
                "estimated_weight_grams": item.estimated_weight_grams,
                "original_weight_grams": item.original_weight_grams,
                "consumed_percentage": item.consumed_percentage,
                "nutrients": item.nutrients.to_dict(),
            }
            for item in items
        ]
        if payload:
            self.client.table("meal_items").insert(payload).execute()

    def list_meals(self, user_id: UUID, limit: int) -> list[FoodScan]:
        """Return meals with nested items, newest first."""
        response = (
            self.client.table("meals")
            .select("*, meal_items(*)")
            .eq("user_id", str(user_id))
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> int:
        """Delete a meal owned by the user; items cascade in the database."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])


def _parse_meal(row: dict[str, object]) -> FoodScan:
    global_scale = row.get("global_scale")
    return FoodScan(
        id=UUID(str(row["id"])),
        timestamp=int(row.get("timestamp") or 0),
        image_url=str(row.get("image_url") or ""),
        description=str(row.get("description") or ""),
        insight=str(row.get("insight") or ""),
        items=[_parse_item(item) for item in row.get("meal_items") or []],
        global_scale=float(global_scale) if global_scale is not None else 100.0,
    )


def _parse_item(row: dict[str, object]) -> FoodItem:
    consumed = row.get("consumed_percentage")
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        estimated_weight_grams=float(row.get("estimated_weight_grams") or 0.0),
        original_weight_grams=float(row.get("original_weight_grams") or 0.0),
        nutrients=Nutrients.from_mapping(row.get("nutrients")),
        consumed_percentage=float(consumed) if consumed is not None else 100.0,
    )
