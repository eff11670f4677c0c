"""Environment based configuration for the Allegro clients."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_COUNTRY
from .exceptions import InvalidParameter

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AllegroSettings:
    """Credentials and environment selection for both clients."""

    webapi_key: Optional[str] = None
    country: int = DEFAULT_COUNTRY
    sandbox: bool = False
    access_token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None


def parse_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUE_VALUES


def load_settings(env_file: Optional[str] = None) -> AllegroSettings:
    """Load settings from the environment.

    Variables from a .env file are loaded first; variables already set
    in the environment take precedence.

    Args:
        env_file: Path of the .env file, searched for if omitted

    Returns:
        AllegroSettings built from the ALLEGRO_* variables

    Raises:
        InvalidParameter: When ALLEGRO_COUNTRY is not a number
    """
    load_dotenv(env_file)

    country = os.getenv("ALLEGRO_COUNTRY")
    try:
        country_code = int(country) if country else DEFAULT_COUNTRY
    except ValueError:
        raise InvalidParameter(f"Invalid country code: {country!r}") from None

    return AllegroSettings(
        webapi_key=os.getenv("ALLEGRO_WEBAPI_KEY"),
        country=country_code,
        sandbox=parse_bool(os.getenv("ALLEGRO_SANDBOX")),
        access_token=os.getenv("ALLEGRO_ACCESS_TOKEN"),
        client_id=os.getenv("ALLEGRO_CLIENT_ID"),
        client_secret=os.getenv("ALLEGRO_CLIENT_SECRET"),
        redirect_uri=os.getenv("ALLEGRO_REDIRECT_URI"),
    )
