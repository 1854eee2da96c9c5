"""Caller identity resolution."""

from typing import Protocol
from uuid import UUID

from meal_scan.errors import UnauthenticatedError


class IdentityResolver(Protocol):
    """Interface for resolving the authenticated caller."""

    def current_user_id(self) -> UUID | None:
        """Return the signed-in user's id, or None when nobody is signed in."""


def require_user_id(resolver: IdentityResolver) -> UUID:
    """Resolve the caller's id or raise UnauthenticatedError."""
    user_id = resolver.current_user_id()
    if user_id is None:
        raise UnauthenticatedError()
    return user_id
