"""Resolve the caller from a Supabase Auth access token."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_scan.services.identity import IdentityResolver


@dataclass
class SupabaseIdentityResolver(IdentityResolver):
    """Looks up the user that owns an access token.

    Auth API errors (expired or malformed tokens) propagate to the caller.
    """

    client: Client
    access_token: str | None

    def current_user_id(self) -> UUID | None:
        """Return the token owner's id, or None without a token or user."""
        if not self.access_token:
            return None
        response = self.client.auth.get_user(self.access_token)
        user = response.user if response else None
        if user is None or not user.id:
            return None
        return UUID(str(user.id))
