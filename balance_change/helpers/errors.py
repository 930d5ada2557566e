"""Exception hierarchy for the balance change query."""


class BalanceChangeError(Exception):
    pass


class MalformedAmountError(BalanceChangeError, ValueError):
    """Transaction value is not a well-formed hex quantity."""


class InvalidHeadResponseError(BalanceChangeError):
    """Head lookup returned something other than a hex block number."""


class BlockFetchError(BalanceChangeError):
    """Base class for failures scoped to a single block."""

    def __init__(self, message: str, block_number: int | None = None) -> None:
        super().__init__(message)
        self.block_number = block_number


class BlockNotFoundError(BlockFetchError):
    pass


class MalformedBlockError(BlockFetchError):
    pass


class TransportError(BlockFetchError):
    """Network failure that survived every retry."""


class RemoteApiError(BlockFetchError):
    """The remote API answered with an explicit error object."""


class RateLimitError(RemoteApiError):
    pass


class QueryFailedError(BalanceChangeError):
    """Opaque failure surfaced to callers of the query."""


__all__ = [
    "BalanceChangeError",
    "BlockFetchError",
    "BlockNotFoundError",
    "InvalidHeadResponseError",
    "MalformedAmountError",
    "MalformedBlockError",
    "QueryFailedError",
    "RateLimitError",
    "RemoteApiError",
    "TransportError",
]
