"""Input validation utilities for Allegro API parameters."""

from collections.abc import Mapping
from typing import Any

from ..constants import ERROR_FIELDS


def validate_country_code(country: int) -> bool:
    """Validate WebAPI country code.

    Args:
        country: The numeric country code to validate

    Returns:
        True if country code is a positive integer
    """
    return isinstance(country, int) and not isinstance(country, bool) and country > 0


def validate_action_params(params: Any) -> bool:
    """Validate parameters passed to a WebAPI action.

    Args:
        params: Parameter mapping (or None for an action without arguments)

    Returns:
        True if params can be sent as the action's argument
    """
    return params is None or isinstance(params, Mapping)


def is_absolute_url(resource: str) -> bool:
    """Check whether a REST resource already carries a scheme."""
    return "://" in resource


def is_error_response(body: Any) -> bool:
    """Check whether a decoded REST body describes an error.

    Args:
        body: Decoded JSON body

    Returns:
        True if body is a dict with a non-null error field
    """
    return isinstance(body, dict) and any(body.get(field) is not None for field in ERROR_FIELDS)


def looks_like_error_text(text: str) -> bool:
    """Check whether an undecodable body mentions an error field."""
    if not text:
        return False
    return any(f'"{field}"' in text for field in ERROR_FIELDS)
