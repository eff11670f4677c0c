"""Unit tests for input validators."""

from collections import OrderedDict

from allegro_api.utils.validators import (
    is_absolute_url,
    is_error_response,
    looks_like_error_text,
    validate_action_params,
    validate_country_code,
)


class TestValidators:
    """Test Allegro parameter validators."""

    def test_validate_country_code(self):
        assert validate_country_code(1) is True
        assert validate_country_code(228) is True

        assert validate_country_code(0) is False
        assert validate_country_code(-1) is False
        assert validate_country_code("1") is False  # type: ignore
        assert validate_country_code(None) is False  # type: ignore
        assert validate_country_code(True) is False

    def test_validate_action_params(self):
        assert validate_action_params(None) is True
        assert validate_action_params({}) is True
        assert validate_action_params(OrderedDict(a=1)) is True

        assert validate_action_params("abc") is False
        assert validate_action_params(["a"]) is False
        assert validate_action_params(1) is False

    def test_is_absolute_url(self):
        assert is_absolute_url("https://api.allegro.pl/me") is True
        assert is_absolute_url("/sale/offers") is False
        assert is_absolute_url("sale/offers?phrase=http") is False

    def test_is_error_response(self):
        assert is_error_response({"errors": []}) is True
        assert is_error_response({"error_description": "expired"}) is True

        assert is_error_response({"error": "x"}) is False
        assert is_error_response({"errors": None}) is False
        assert is_error_response({"errors": None, "error_description": None}) is False
        assert is_error_response({"array": [{"errors": []}]}) is False
        assert is_error_response(None) is False
        assert is_error_response([1, 2]) is False

    def test_looks_like_error_text(self):
        assert looks_like_error_text('{"errors": [') is True
        assert looks_like_error_text('{"error_description": "x"') is True

        assert looks_like_error_text("") is False
        assert looks_like_error_text("<html>errors</html>") is False
