"""Supabase repository for critical samples."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_scan.domain.scans import CriticalSample
from meal_scan.errors import StoreWriteError
from meal_scan.services.food_log import CriticalSampleRepository


@dataclass
class SupabaseCriticalSampleRepository(CriticalSampleRepository):
    """Supabase implementation for critical samples."""

    client: Client

    def create_sample(self, user_id: UUID, sample: CriticalSample) -> UUID:
        """Create a sample row and return its id."""
        response = (
            self.client.table("critical_samples")
            .insert(
                {
                    "user_id": str(user_id),
                    "timestamp": sample.timestamp,
                    "food_name": sample.food_name,
                    "image_url": sample.image_url,
                    "ai_weight": sample.ai_weight,
                    "user_weight": sample.user_weight,
                    "deviation_percent": sample.deviation_percent,
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreWriteError("Failed to create critical sample")
        return UUID(str(response.data[0]["id"]))

    def list_samples(self, user_id: UUID) -> list[CriticalSample]:
        """Return samples, newest first."""
        response = (
            self.client.table("critical_samples")
            .select("*")
            .eq("user_id", str(user_id))
            .order("timestamp", desc=True)
            .execute()
        )
        return [
            CriticalSample(
                id=UUID(str(row["id"])),
                timestamp=int(row.get("timestamp") or 0),
                image_url=str(row.get("image_url") or ""),
                food_name=str(row.get("food_name", "")),
                ai_weight=float(row.get("ai_weight") or 0.0),
                user_weight=float(row.get("user_weight") or 0.0),
                deviation_percent=float(row.get("deviation_percent") or 0.0),
            )
            for row in response.data or []
        ]

    def delete_sample(self, user_id: UUID, sample_id: UUID) -> int:
        """Delete a sample owned by the user and return rows affected."""
        response = (
            self.client.table("critical_samples")
            .delete()
            .eq("id", str(sample_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])
