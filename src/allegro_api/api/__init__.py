"""Allegro API client modules."""

from .rest import RestApiClient
from .webapi import WebApiClient, resolve_action_name

__all__ = ["RestApiClient", "WebApiClient", "resolve_action_name"]
