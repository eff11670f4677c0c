"""Tests for environment based configuration."""

from unittest.mock import patch

import pytest

from allegro_api.config import AllegroSettings, load_settings, parse_bool
from allegro_api.exceptions import InvalidParameter


@pytest.fixture(autouse=True)
def no_dotenv():
    """Keep a local .env file out of the tests."""
    with patch("allegro_api.config.load_dotenv") as mock_load:
        yield mock_load


def test_load_settings_from_environment():
    env = {
        "ALLEGRO_WEBAPI_KEY": "web_key",
        "ALLEGRO_COUNTRY": "228",
        "ALLEGRO_SANDBOX": "true",
        "ALLEGRO_ACCESS_TOKEN": "access",
        "ALLEGRO_CLIENT_ID": "client",
        "ALLEGRO_CLIENT_SECRET": "secret",
        "ALLEGRO_REDIRECT_URI": "https://example.com/callback",
    }
    with patch.dict("os.environ", env, clear=True):
        settings = load_settings()

    assert settings == AllegroSettings(
        webapi_key="web_key",
        country=228,
        sandbox=True,
        access_token="access",
        client_id="client",
        client_secret="secret",
        redirect_uri="https://example.com/callback",
    )


def test_load_settings_defaults():
    with patch.dict("os.environ", {}, clear=True):
        settings = load_settings()

    assert settings == AllegroSettings()
    assert settings.country == 1
    assert settings.sandbox is False


def test_load_settings_uses_env_file(no_dotenv):
    with patch.dict("os.environ", {}, clear=True):
        load_settings(".env.test")

    no_dotenv.assert_called_once_with(".env.test")


def test_invalid_country():
    with patch.dict("os.environ", {"ALLEGRO_COUNTRY": "poland"}, clear=True):
        with pytest.raises(InvalidParameter):
            load_settings()


def test_parse_bool():
    for value in ["1", "true", "TRUE", " yes ", "On"]:
        assert parse_bool(value) is True
    for value in [None, "", "0", "false", "no", "sandbox"]:
        assert parse_bool(value) is False
