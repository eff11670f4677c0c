"""REST API client for the Allegro public API."""

import base64
import json
import logging
import pprint
import re
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

import requests

from ..constants import (
    ARRAY_KEY,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT,
    GRANT_TYPES,
    HTTP_VERSIONS,
    MEDIA_TYPE,
    OAUTH_AUTHORIZE_URL,
    OAUTH_TOKEN_URL,
    REST_SANDBOX_URL,
    REST_URL,
    USER_AGENT,
)
from ..exceptions import RemoteApiError
from ..utils.validators import is_absolute_url, is_error_response, looks_like_error_text

if TYPE_CHECKING:
    from ..config import AllegroSettings

logger = logging.getLogger(__name__)

STATUS_LINE_PATTERN = re.compile(r"HTTP/[0-9.]+\s+([0-9]+)")


class RestApiClient:
    """Client for the Allegro REST API.

    Any resource can be called through the verb methods; the response is
    always a dict. Obtaining a token::

        link = RestApiClient.get_auth_link(client_id, redirect_uri)
        # the user grants access and is redirected back with ?code=...
        tokens = RestApiClient.generate_token(code, client_id, client_secret, redirect_uri)

        # access tokens live for 12 hours, refresh them as often as needed
        tokens = RestApiClient.refresh_token(
            tokens["refresh_token"], client_id, client_secret, redirect_uri
        )

        api = RestApiClient(tokens["access_token"])
        ratings = api.get(f"/sale/user-ratings?user.id={user_id}")
    """

    def __init__(self, token: Optional[str], sandbox: bool = False) -> None:
        """Initialize the REST client.

        Args:
            token: OAuth2 bearer token, None while a token is being obtained
            sandbox: Use the sandbox environment instead of production
        """
        self.token = token
        self.sandbox = bool(sandbox)

    @classmethod
    def from_settings(cls, settings: "AllegroSettings") -> "RestApiClient":
        """Create a client from environment settings."""
        if not settings.access_token:
            raise ValueError(
                "Missing Allegro access token. Please set the ALLEGRO_ACCESS_TOKEN environment variable."
            )
        return cls(settings.access_token, settings.sandbox)

    @property
    def url(self) -> str:
        """Base URL of the selected environment."""
        return REST_SANDBOX_URL if self.sandbox else REST_URL

    # OAuth2 helpers

    @staticmethod
    def get_auth_link(client_id: str, redirect_uri: str) -> str:
        """Return the link a user follows to grant the application access."""
        query = urlencode(
            {
                "response_type": "code",
                "client_id": client_id,
                "redirect_uri": redirect_uri,
            }
        )
        return f"{OAUTH_AUTHORIZE_URL}?{query}"

    @staticmethod
    def basic_auth_header(client_id: str, client_secret: str) -> str:
        """Build the HTTP Basic credentials used by the token endpoint."""
        credentials = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("ascii")
        return f"Basic {credentials}"

    @classmethod
    def generate_token(
        cls, code: str, client_id: str, client_secret: str, redirect_uri: str
    ) -> Dict[str, Any]:
        """Exchange an authorization code for access and refresh tokens.

        Args:
            code: Code passed to the redirect URI
            client_id: Application client ID
            client_secret: Application client secret
            redirect_uri: Redirect URI registered for the application

        Returns:
            Token response (access_token, refresh_token, expires_in, ...)
        """
        return cls._request_token(
            "POST",
            {
                "grant_type": GRANT_TYPES["authorization_code"],
                "code": code,
                "redirect_uri": redirect_uri,
            },
            client_id,
            client_secret,
        )

    @classmethod
    def generate_token_for_application(cls, client_id: str, client_secret: str) -> Dict[str, Any]:
        """Obtain an application token using the client credentials grant."""
        return cls._request_token(
            "GET",
            {"grant_type": GRANT_TYPES["client_credentials"]},
            client_id,
            client_secret,
        )

    @classmethod
    def refresh_token(
        cls, refresh_token: str, client_id: str, client_secret: str, redirect_uri: str
    ) -> Dict[str, Any]:
        """Exchange a refresh token for a new pair of tokens."""
        return cls._request_token(
            "POST",
            {
                "grant_type": GRANT_TYPES["refresh_token"],
                "refresh_token": refresh_token,
                "redirect_uri": redirect_uri,
            },
            client_id,
            client_secret,
        )

    @classmethod
    def _request_token(
        cls, method: str, params: Dict[str, str], client_id: str, client_secret: str
    ) -> Dict[str, Any]:
        api = cls(None)
        return api.send_request(
            f"{OAUTH_TOKEN_URL}?{urlencode(params)}",
            method,
            headers={"Authorization": cls.basic_auth_header(client_id, client_secret)},
        )

    @staticmethod
    def get_uuid() -> str:
        """Generate a UUID4, e.g. for command resources."""
        return str(uuid.uuid4())

    # Requests

    def get(self, resource: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Send a GET request."""
        return self.send_request(resource, "GET", headers=headers)

    def post(
        self,
        resource: str,
        data: Any,
        headers: Optional[Mapping[str, str]] = None,
        as_json: bool = True,
    ) -> Dict[str, Any]:
        """Send a POST request, as JSON unless as_json is False."""
        return self.send_request(resource, "POST", data, headers, as_json)

    def put(
        self,
        resource: str,
        data: Any,
        headers: Optional[Mapping[str, str]] = None,
        as_json: bool = True,
    ) -> Dict[str, Any]:
        """Send a PUT request, as JSON unless as_json is False."""
        return self.send_request(resource, "PUT", data, headers, as_json)

    def delete(self, resource: str, headers: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Send a DELETE request."""
        return self.send_request(resource, "DELETE", headers=headers)

    def send_request(
        self,
        resource: str,
        method: str,
        data: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        as_json: bool = True,
    ) -> Dict[str, Any]:
        """Send a request to the REST API and decode its response.

        Non-2xx responses are not raised by the transport; the decoded body
        decides whether the call failed.

        Args:
            resource: Resource path relative to the base URL, or an absolute URL
            method: HTTP method (GET, POST, PUT, DELETE)
            data: Request body
            headers: Headers overriding the defaults
            as_json: Encode data as JSON, otherwise send it as is

        Returns:
            Decoded response with request_headers and response_headers attached

        Raises:
            RemoteApiError: When the response carries errors
            requests.RequestException: For network errors
        """
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        method = method.upper()
        url = self.resolve_url(resource)
        request_headers = self.compose_headers(headers)

        # Query strings may hold codes and refresh tokens
        logger.info(f"Request {request_id}: Starting {method} {url.split('?', 1)[0]}")

        response = requests.request(
            method=method,
            url=url,
            headers=request_headers,
            data=self._encode_body(data, as_json),
            timeout=DEFAULT_TIMEOUT,
        )

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.info(
            f"Request {request_id}: Completed in {duration_ms}ms, "
            f"status={response.status_code}"
        )

        response_headers = self.response_header_lines(response)
        result = self._decode_body(response.content)

        # Some resources return a bare array
        if isinstance(result, list):
            result = {ARRAY_KEY: result}

        if is_error_response(result):
            raise RemoteApiError(
                f"An error has occurred: {pprint.pformat(result)}",
                self.response_code(response_headers),
                result,
            )

        if result is None and looks_like_error_text(response.text):
            raise RemoteApiError(
                f"An error has occurred: {response.text}",
                self.response_code(response_headers),
            )

        if not isinstance(result, dict):
            result = {}

        result["request_headers"] = request_headers
        result["response_headers"] = response_headers

        return result

    def resolve_url(self, resource: str) -> str:
        """Return the absolute URL for a resource."""
        if is_absolute_url(resource):
            return resource
        return f"{self.url}/{resource.lstrip('/')}"

    def default_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {
            "User-Agent": USER_AGENT,
            "Authorization": f"Bearer {self.token or ''}",
            "Content-Type": MEDIA_TYPE,
            "Accept": MEDIA_TYPE,
            "Accept-Language": DEFAULT_LANGUAGE,
        }

    def compose_headers(self, headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Overlay caller headers on the defaults."""
        return self.merge_headers(self.default_headers(), headers)

    @staticmethod
    def merge_headers(
        defaults: Mapping[str, str], overrides: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """Merge two header mappings, overrides winning on key collision."""
        merged = dict(defaults)
        if overrides:
            merged.update(overrides)
        return merged

    @staticmethod
    def response_header_lines(response: requests.Response) -> List[str]:
        """Return the status line followed by the response header lines."""
        version = HTTP_VERSIONS.get(getattr(response.raw, "version", None), "1.1")
        status_line = f"HTTP/{version} {response.status_code} {response.reason or ''}".rstrip()
        return [status_line] + [f"{name}: {value}" for name, value in response.headers.items()]

    @staticmethod
    def response_code(headers: List[str]) -> int:
        """Return the status code from the first status line, or 0."""
        for line in headers:
            match = STATUS_LINE_PATTERN.search(line)
            if match:
                return int(match.group(1))
        return 0

    @staticmethod
    def _encode_body(data: Any, as_json: bool) -> Any:
        if data is None:
            return None
        return json.dumps(data) if as_json else data

    @staticmethod
    def _decode_body(content: bytes) -> Any:
        if not content:
            return None
        # json.loads detects UTF-8/16/32 from the raw bytes
        try:
            return json.loads(content)
        except ValueError:
            return None
