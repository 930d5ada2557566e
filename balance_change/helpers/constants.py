"""Common configuration constants used across the application."""

# Etherscan
DEFAULT_ETHERSCAN_API_URL = "https://api.etherscan.io/api"
"""Default Etherscan API endpoint"""

# Block window
DEFAULT_NUMBER_OF_BLOCKS = 100
"""Default number of most recent blocks to inspect"""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

# Retry Configuration
MAX_ATTEMPTS = 3
"""Default number of attempts per remote call (first try included)"""

RETRY_BASE_DELAY = 1.0
"""Base delay for exponential backoff in seconds"""

RETRY_MAX_DELAY = 60.0
"""Maximum delay between retries in seconds"""

RETRYABLE_STATUS_CODES = frozenset({429})
"""HTTP status codes retried in addition to the 5xx class"""

# Concurrency Limits
DEFAULT_MAX_CONCURRENT_REQUESTS = 10
"""Default number of block requests in flight at once"""

# HTTP Connection Pooling
MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 20
"""Maximum total number of connections"""

# Units
ETHER_DECIMALS = 18
"""Number of decimals between wei and ether"""

WEI_PER_ETHER = 10**ETHER_DECIMALS
"""Wei in one ether"""


__all__ = [
    "DEFAULT_ETHERSCAN_API_URL",
    "DEFAULT_MAX_CONCURRENT_REQUESTS",
    "DEFAULT_NUMBER_OF_BLOCKS",
    "DEFAULT_TIMEOUT",
    "ETHER_DECIMALS",
    "MAX_ATTEMPTS",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
    "RETRYABLE_STATUS_CODES",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
    "WEI_PER_ETHER",
]
