"""Constants and configuration for the Allegro WebAPI and REST API."""

# Library version, also reported in the User-Agent header
VERSION = "3.1.0"

USER_AGENT = f"AllegroApi/{VERSION} (Language=Python)"

# SOAP WebAPI endpoints
WEBAPI_WSDL = "https://webapi.allegro.pl/service.php?wsdl"
WEBAPI_SANDBOX_WSDL = "https://webapi.allegro.pl.webapisandbox.pl/service.php?wsdl"

# Every WebAPI action name carries this prefix (doLogin, doGetItemsInfo, ...)
ACTION_PREFIX = "do"

# Country codes accepted by the WebAPI
COUNTRY_PL = 1

DEFAULT_COUNTRY = COUNTRY_PL

# WebAPI actions used by the client itself
WEBAPI_ACTIONS = {
    "status": "doQueryAllSysStatus",
    "login": "doLogin",
    "login_enc": "doLoginEnc",
}

# REST API endpoints
REST_URL = "https://api.allegro.pl"
REST_SANDBOX_URL = "https://api.allegro.pl.allegrosandbox.pl"

# OAuth2 endpoints
OAUTH_AUTHORIZE_URL = "https://allegro.pl/auth/oauth/authorize"
OAUTH_TOKEN_URL = "https://allegro.pl/auth/oauth/token"

# OAuth2 grant types
GRANT_TYPES = {
    "authorization_code": "authorization_code",
    "client_credentials": "client_credentials",
    "refresh_token": "refresh_token",
}

# Public REST API media type
MEDIA_TYPE = "application/vnd.allegro.public.v1+json"

DEFAULT_LANGUAGE = "pl-PL"

# Fields which mark a decoded REST body as an error response
ERROR_FIELDS = ("errors", "error_description")

# Key under which a bare JSON array response is wrapped
ARRAY_KEY = "array"

# Default request timeout (seconds)
DEFAULT_TIMEOUT = 30

# Textual HTTP versions keyed by the numeric form used by urllib3
HTTP_VERSIONS = {
    9: "0.9",
    10: "1.0",
    11: "1.1",
    20: "2",
}
