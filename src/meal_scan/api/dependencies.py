"""Request-scoped dependencies."""

from fastapi import Header, Request

from meal_scan.config import parse_bearer_token
from meal_scan.containers import AppContainer
from meal_scan.services.food_log import FoodLogService


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


def get_food_log_service(
    request: Request, authorization: str | None = Header(default=None)
) -> FoodLogService:
    """Build a food log service bound to the request's bearer token."""
    container = get_container(request)
    return container.food_log_service(parse_bearer_token(authorization))
