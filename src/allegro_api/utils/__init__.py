"""Utility modules for Allegro API operations."""

from .validators import (
    is_absolute_url,
    is_error_response,
    looks_like_error_text,
    validate_action_params,
    validate_country_code,
)

__all__ = [
    "is_absolute_url",
    "is_error_response",
    "looks_like_error_text",
    "validate_action_params",
    "validate_country_code",
]
