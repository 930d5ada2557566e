"""Tests for configuration and environment variable helpers."""

import os

import pytest

from balance_change.helpers.config import (
    Settings,
    get_bool_env,
    get_int_env,
    get_optional_env,
    get_required_env,
)


@pytest.mark.usefixtures("clean_env")
class TestEnvHelpers:
    """Tests for the environment variable helpers."""

    def test_required_env_returns_value(self) -> None:
        os.environ["TEST_KEY"] = "test_value"
        assert get_required_env("TEST_KEY") == "test_value"

    def test_required_env_missing_raises(self) -> None:
        with pytest.raises(ValueError, match="TEST_KEY environment variable is not set"):
            get_required_env("TEST_KEY")

    def test_required_env_empty_raises(self) -> None:
        os.environ["TEST_KEY"] = ""
        with pytest.raises(ValueError, match="is not set"):
            get_required_env("TEST_KEY")

    def test_optional_env_default(self) -> None:
        assert get_optional_env("TEST_KEY") is None
        assert get_optional_env("TEST_KEY", "fallback") == "fallback"

    def test_int_env(self) -> None:
        assert get_int_env("TEST_KEY", 7) == 7
        os.environ["TEST_KEY"] = "42"
        assert get_int_env("TEST_KEY", 7) == 42

    def test_int_env_invalid_raises(self) -> None:
        os.environ["TEST_KEY"] = "many"
        with pytest.raises(ValueError, match="TEST_KEY must be an integer"):
            get_int_env("TEST_KEY", 7)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("false", False), ("no", False)],
    )
    def test_bool_env(self, raw: str, expected: bool) -> None:
        os.environ["TEST_KEY"] = raw
        assert get_bool_env("TEST_KEY") is expected

    def test_bool_env_default_and_invalid(self) -> None:
        assert get_bool_env("TEST_KEY", default=True) is True
        os.environ["TEST_KEY"] = "maybe"
        with pytest.raises(ValueError, match="must be a boolean"):
            get_bool_env("TEST_KEY")


@pytest.mark.usefixtures("clean_env")
class TestSettings:
    """Tests for Settings."""

    def test_from_env_defaults(self) -> None:
        os.environ["ETHERSCAN_API_KEY"] = "secret"

        settings = Settings.from_env()

        assert settings.api_key == "secret"
        assert settings.api_url == "https://api.etherscan.io/api"
        assert settings.chain_id is None
        assert settings.number_of_blocks == 100
        assert settings.max_concurrent_requests == 10
        assert settings.timeout == 30.0
        assert settings.max_attempts == 3
        assert settings.retry_base_delay == 1.0
        assert settings.fail_on_empty_window is False

    def test_from_env_overrides(self) -> None:
        os.environ.update({
            "ETHERSCAN_API_KEY": "secret",
            "ETHERSCAN_API_URL": "https://api.etherscan.io/v2/api",
            "ETHERSCAN_CHAIN_ID": "1",
            "NUMBER_OF_BLOCKS": "25",
            "MAX_CONCURRENT_REQUESTS": "4",
            "HTTP_TIMEOUT": "5.5",
            "MAX_ATTEMPTS": "5",
            "RETRY_BASE_DELAY": "0.25",
            "FAIL_ON_EMPTY_WINDOW": "true",
        })

        settings = Settings.from_env()

        assert settings.api_url == "https://api.etherscan.io/v2/api"
        assert settings.chain_id == 1
        assert settings.number_of_blocks == 25
        assert settings.max_concurrent_requests == 4
        assert settings.timeout == 5.5
        assert settings.max_attempts == 5
        assert settings.retry_base_delay == 0.25
        assert settings.fail_on_empty_window is True

    def test_missing_api_key_raises(self) -> None:
        with pytest.raises(ValueError, match="ETHERSCAN_API_KEY"):
            Settings.from_env()

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("NUMBER_OF_BLOCKS", "-1"),
            ("NUMBER_OF_BLOCKS", "ten"),
            ("MAX_CONCURRENT_REQUESTS", "0"),
            ("MAX_ATTEMPTS", "0"),
            ("HTTP_TIMEOUT", "0"),
        ],
    )
    def test_invalid_values_raise(self, key: str, value: str) -> None:
        os.environ["ETHERSCAN_API_KEY"] = "secret"
        os.environ[key] = value

        with pytest.raises(ValueError):
            Settings.from_env()

    def test_settings_are_immutable(self) -> None:
        settings = Settings(api_key="secret")

        with pytest.raises(ValueError):
            settings.number_of_blocks = 5  # type: ignore[misc]
