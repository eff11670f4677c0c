"""Python clients for the Allegro WebAPI (SOAP) and REST API."""

from .api import RestApiClient, WebApiClient, resolve_action_name
from .config import AllegroSettings, load_settings
from .constants import VERSION as __version__
from .exceptions import AllegroAPIError, InvalidArgument, InvalidParameter, RemoteApiError

__all__ = [
    "AllegroAPIError",
    "AllegroSettings",
    "InvalidArgument",
    "InvalidParameter",
    "RemoteApiError",
    "RestApiClient",
    "WebApiClient",
    "load_settings",
    "resolve_action_name",
    "__version__",
]
