"""Configuration management and environment variable utilities."""

import os

from typing import Self

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from balance_change.helpers.constants import (
    DEFAULT_ETHERSCAN_API_URL,
    DEFAULT_MAX_CONCURRENT_REQUESTS,
    DEFAULT_NUMBER_OF_BLOCKS,
    DEFAULT_TIMEOUT,
    MAX_ATTEMPTS,
    RETRY_BASE_DELAY,
)


# Load environment variables from .env file
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from balance_change.helpers.config import get_required_env

        api_key = get_required_env("ETHERSCAN_API_KEY")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_int_env(key: str, default: int) -> int:
    """Get an integer environment variable.

    Raises:
        ValueError: If the variable is set but is not an integer
    """
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        msg = f"{key} must be an integer, got {value!r}"
        raise ValueError(msg) from e


def get_float_env(key: str, default: float) -> float:
    """Get a float environment variable.

    Raises:
        ValueError: If the variable is set but is not a number
    """
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as e:
        msg = f"{key} must be a number, got {value!r}"
        raise ValueError(msg) from e


def get_bool_env(key: str, *, default: bool = False) -> bool:
    """Get a boolean environment variable.

    Accepts 1/0, true/false, yes/no and on/off (case-insensitive).

    Raises:
        ValueError: If the variable holds anything else
    """
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    msg = f"{key} must be a boolean, got {value!r}"
    raise ValueError(msg)


class Settings(BaseModel):
    """Immutable process configuration for the balance change query."""

    api_url: str = Field(default=DEFAULT_ETHERSCAN_API_URL, min_length=1)
    api_key: str = Field(..., min_length=1)
    chain_id: int | None = Field(default=None, ge=1)
    number_of_blocks: int = Field(default=DEFAULT_NUMBER_OF_BLOCKS, ge=0)
    max_concurrent_requests: int = Field(default=DEFAULT_MAX_CONCURRENT_REQUESTS, ge=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_attempts: int = Field(default=MAX_ATTEMPTS, ge=1)
    retry_base_delay: float = Field(default=RETRY_BASE_DELAY, ge=0)
    fail_on_empty_window: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls) -> Self:
        """Build settings from the environment (and .env file).

        Raises:
            ValueError: If ETHERSCAN_API_KEY is missing or a value is invalid

        Example:
            ```python
            from balance_change.helpers.config import Settings

            settings = Settings.from_env()
            ```
        """
        chain_id = get_optional_env("ETHERSCAN_CHAIN_ID")
        return cls(
            api_url=get_optional_env("ETHERSCAN_API_URL") or DEFAULT_ETHERSCAN_API_URL,
            api_key=get_required_env("ETHERSCAN_API_KEY"),
            chain_id=int(chain_id) if chain_id else None,
            number_of_blocks=get_int_env("NUMBER_OF_BLOCKS", DEFAULT_NUMBER_OF_BLOCKS),
            max_concurrent_requests=get_int_env(
                "MAX_CONCURRENT_REQUESTS", DEFAULT_MAX_CONCURRENT_REQUESTS
            ),
            timeout=get_float_env("HTTP_TIMEOUT", DEFAULT_TIMEOUT),
            max_attempts=get_int_env("MAX_ATTEMPTS", MAX_ATTEMPTS),
            retry_base_delay=get_float_env("RETRY_BASE_DELAY", RETRY_BASE_DELAY),
            fail_on_empty_window=get_bool_env("FAIL_ON_EMPTY_WINDOW"),
        )


__all__ = [
    "Settings",
    "get_bool_env",
    "get_float_env",
    "get_int_env",
    "get_optional_env",
    "get_required_env",
]
