"""HTTP client utilities and retry policy."""

from asyncio import sleep as asyncio_sleep
from dataclasses import dataclass, field

from typing import Any, ParamSpec, TypeVar

from collections.abc import Awaitable, Callable

import httpx

from balance_change.helpers.constants import (
    DEFAULT_TIMEOUT,
    MAX_ATTEMPTS,
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
    RETRYABLE_STATUS_CODES,
)
from balance_change.helpers.errors import RateLimitError
from balance_change.helpers.logging import get_logger


logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def is_retryable_error(error: BaseException) -> bool:
    """Tell whether an error is transient and worth another attempt.

    Timeouts, connection-level failures, 5xx and 429 responses and in-band
    rate limit answers are transient. Anything else is permanent.

    Example:
        >>> is_retryable_error(httpx.ConnectError("reset"))
        True
        >>> is_retryable_error(ValueError("bad payload"))
        False
    """
    if isinstance(error, RateLimitError):
        return True
    if isinstance(
        error,
        httpx.TimeoutException | httpx.NetworkError | httpx.RemoteProtocolError,
    ):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status >= 500 or status in RETRYABLE_STATUS_CODES
    return False


@dataclass(frozen=True)
class RetryPolicy:
    """Retry an async operation with exponential backoff.

    Attributes:
        max_attempts: Total attempts, the first one included
        base_delay: Delay before the second attempt in seconds
        max_delay: Upper bound for a single delay in seconds
        retry_if: Predicate deciding whether an error is retried
        sleep: Coroutine used to wait between attempts

    Example:
        ```python
        policy = RetryPolicy(max_attempts=3, base_delay=0.5)
        head = await policy.run(fetch_head, client)
        # Waits 0.5s then 1s between the three attempts
        ```
    """

    max_attempts: int = MAX_ATTEMPTS
    base_delay: float = RETRY_BASE_DELAY
    max_delay: float = RETRY_MAX_DELAY
    retry_if: Callable[[BaseException], bool] = is_retryable_error
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio_sleep, repr=False)
    log_errors: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)

    def delay_for(self, attempt: int) -> float:
        """Delay after the given zero-based attempt."""
        return min(self.base_delay * (2**attempt), self.max_delay)

    async def run(
        self, func: Callable[P, Awaitable[T]], *args: P.args, **kwargs: P.kwargs
    ) -> T:
        """Call ``func`` until it succeeds, fails permanently or runs out of attempts.

        Raises:
            Exception: The last error raised by ``func``
        """
        name = getattr(func, "__name__", repr(func))

        for attempt in range(self.max_attempts):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                if not self.retry_if(e):
                    raise
                if attempt == self.max_attempts - 1:
                    if self.log_errors:
                        logger.error(
                            "%s failed after %d attempts: %s",
                            name,
                            self.max_attempts,
                            e,
                        )
                    raise
                if self.log_errors:
                    logger.warning(
                        "%s transient error (attempt %d/%d): %s",
                        name,
                        attempt + 1,
                        self.max_attempts,
                        e,
                    )

            await self.sleep(self.delay_for(attempt))

        # Unreachable while max_attempts >= 1
        msg = f"{name} failed without exception"
        raise RuntimeError(msg)


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient with a bounded connection pool.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from balance_change.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            response = await client.get("https://example.com")
        ```
    """
    kwargs.setdefault(
        "limits",
        httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        ),
    )
    return httpx.AsyncClient(timeout=timeout, **kwargs)


__all__ = [
    "RetryPolicy",
    "create_http_client",
    "is_retryable_error",
]
