"""SOAP client for the Allegro WebAPI."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

import requests
from zeep import Client
from zeep.helpers import serialize_object
from zeep.transports import Transport

from ..constants import (
    ACTION_PREFIX,
    DEFAULT_COUNTRY,
    DEFAULT_TIMEOUT,
    USER_AGENT,
    WEBAPI_ACTIONS,
    WEBAPI_SANDBOX_WSDL,
    WEBAPI_WSDL,
)
from ..exceptions import InvalidArgument, InvalidParameter
from ..utils.validators import validate_action_params, validate_country_code

if TYPE_CHECKING:
    from ..config import AllegroSettings

logger = logging.getLogger(__name__)


def resolve_action_name(name: str) -> str:
    """Return the WebAPI action name for a method name.

    Names already carrying the action prefix are returned unchanged,
    e.g. both ``getSession`` and ``doGetSession`` resolve to ``doGetSession``.

    Args:
        name: Method or action name

    Returns:
        Canonical action name

    Raises:
        InvalidArgument: When name is empty
    """
    if not name:
        raise InvalidArgument("Action name cannot be empty")
    if name.startswith(ACTION_PREFIX):
        return name
    return f"{ACTION_PREFIX}{name[0].upper()}{name[1:]}"


class WebApiClient:
    """Client for the Allegro SOAP WebAPI.

    Every WebAPI action can be invoked with ``call`` or as a method of the
    client; the action prefix may be omitted::

        api = WebApiClient(api_key)
        api.login({
            "userLogin": login,
            "userPassword": password,
            "countryCode": api.country,
            "webapiKey": api.api_key,
            "localVersion": api.version_key,
        })
        api.getMyData({"sessionHandle": api.session})  # calls doGetMyData

    Note that any public attribute not defined here resolves to an action.
    """

    def __init__(
        self,
        api_key: str,
        country: int = DEFAULT_COUNTRY,
        sandbox: bool = False,
        transport: Optional[Transport] = None,
    ) -> None:
        """Initialize the client and fetch the version key of the country.

        Args:
            api_key: WebAPI key
            country: WebAPI country code
            sandbox: Use the sandbox WebAPI instead of production
            transport: zeep transport, a requests-backed one is created if omitted

        Raises:
            InvalidParameter: When the country code is unknown to the WebAPI
        """
        if not validate_country_code(country):
            raise InvalidParameter(f"Invalid country code: {country!r}")

        self.api_key = api_key
        self.country = country
        self.sandbox = bool(sandbox)
        self.session: Optional[str] = None
        self.wsdl = WEBAPI_SANDBOX_WSDL if self.sandbox else WEBAPI_WSDL

        # Repeated elements are decoded as lists from the WSDL schema,
        # including when a single element is present
        self._soap = Client(self.wsdl, transport=transport or self._create_transport())

        self.version_key = self._fetch_version_key()

    @classmethod
    def from_settings(
        cls, settings: "AllegroSettings", transport: Optional[Transport] = None
    ) -> "WebApiClient":
        """Create a client from environment settings."""
        if not settings.webapi_key:
            raise ValueError(
                "Missing Allegro WebAPI key. Please set the ALLEGRO_WEBAPI_KEY environment variable."
            )
        return cls(settings.webapi_key, settings.country, settings.sandbox, transport=transport)

    @staticmethod
    def _create_transport() -> Transport:
        transport = Transport(
            session=requests.Session(),
            timeout=DEFAULT_TIMEOUT,
            operation_timeout=DEFAULT_TIMEOUT,
        )
        # zeep sets its own User-Agent on the session
        transport.session.headers["User-Agent"] = USER_AGENT
        return transport

    def _fetch_version_key(self) -> Any:
        status = self.call(
            WEBAPI_ACTIONS["status"],
            {"countryId": self.country, "webapiKey": self.api_key},
        )

        for record in self._country_records(status):
            if record.get("countryId") == self.country:
                logger.info(f"Resolved WebAPI version key for country {self.country}")
                return record.get("verKey")

        raise InvalidParameter(f"Invalid country code: {self.country}")

    @staticmethod
    def _country_records(status: Any) -> List[Dict[str, Any]]:
        # zeep may already have unwrapped the single sysCountryStatus child
        records = serialize_object(status, target_cls=dict)
        if isinstance(records, dict) and "sysCountryStatus" in records:
            records = records["sysCountryStatus"]
        if isinstance(records, dict):
            records = records.get("item")
        return [record for record in records or [] if isinstance(record, dict)]

    def call(self, action: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke a WebAPI action.

        Args:
            action: Action name, with or without the ``do`` prefix
            params: Action parameters

        Returns:
            The action's response, as decoded by zeep

        Raises:
            InvalidArgument: When params is not a mapping
            zeep.exceptions.Fault: When the WebAPI returns a SOAP fault
        """
        if not validate_action_params(params):
            raise InvalidArgument(
                f"Parameters of {action} must be a mapping, got {type(params).__name__}"
            )

        name = resolve_action_name(action)
        logger.debug(f"Calling WebAPI action {name}")

        operation = getattr(self._soap.service, name)
        return operation(**dict(params or {}))

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def action(*args: Any) -> Any:
            if args and not isinstance(args[0], Mapping):
                raise InvalidArgument(
                    f"Parameters of {name} must be a mapping, got {type(args[0]).__name__}"
                )
            return self.call(name, args[0] if args else None)

        action.__name__ = name
        return action

    def login(self, params: Mapping[str, Any]) -> Any:
        """Log in with a plain password and store the session handle.

        Raises:
            KeyError: When the response carries no sessionHandlePart, the
                session is then left unchanged
        """
        return self._login(WEBAPI_ACTIONS["login"], params)

    def login_enc(self, params: Mapping[str, Any]) -> Any:
        """Log in with an encoded password and store the session handle.

        Raises:
            KeyError: When the response carries no sessionHandlePart
        """
        return self._login(WEBAPI_ACTIONS["login_enc"], params)

    def _login(self, action: str, params: Mapping[str, Any]) -> Any:
        response = self.call(action, params)
        self.session = response["sessionHandlePart"]
        logger.info(f"WebAPI session opened with {action}")
        return response

    def do_login(self, params: Mapping[str, Any]) -> Any:
        return self.login(params)

    def do_login_enc(self, params: Mapping[str, Any]) -> Any:
        return self.login_enc(params)

    # The remote action names must store the session too
    doLogin = do_login
    doLoginEnc = do_login_enc

    def default_params(self) -> Dict[str, Any]:
        """Parameters most actions expect, taken from the client's state."""
        return {
            "webapiKey": self.api_key,
            "countryCode": self.country,
            "localVersion": self.version_key,
            "sessionHandle": self.session,
        }
