"""Supabase Storage bucket for meal photos."""

from dataclasses import dataclass

from supabase import Client

from meal_scan.services.food_log import ImageStore


@dataclass
class SupabaseImageStore(ImageStore):
    """Stores images in a public Supabase Storage bucket."""

    client: Client
    bucket: str = "food-images"

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Upload bytes without overwriting and return the stored path."""
        response = self.client.storage.from_(self.bucket).upload(
            path=key,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        return response.path

    def public_url(self, path: str) -> str:
        """Return the bucket's public URL for a path."""
        return self.client.storage.from_(self.bucket).get_public_url(path)
