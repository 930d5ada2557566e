"""Concurrent block fetching with per-block failure tolerance."""

import asyncio

from collections.abc import Callable, Sequence

import httpx

from balance_change.blocks.models import Block, BlockFetchOutcome
from balance_change.helpers.constants import DEFAULT_MAX_CONCURRENT_REQUESTS
from balance_change.helpers.errors import BlockFetchError
from balance_change.helpers.etherscan import EtherscanClient
from balance_change.helpers.logging import get_logger


logger = get_logger(__name__)


async def fetch_blocks(
    etherscan: EtherscanClient,
    client: httpx.AsyncClient,
    block_numbers: Sequence[int],
    max_concurrency: int = DEFAULT_MAX_CONCURRENT_REQUESTS,
    on_outcome: Callable[[BlockFetchOutcome], None] | None = None,
) -> list[BlockFetchOutcome]:
    """Fetch every block of a window, at most ``max_concurrency`` at a time.

    A block that still fails after the client's retries is logged and
    recorded as a failed outcome; the other fetches carry on. Errors that are
    not block fetch errors are programming faults: the remaining fetches are
    cancelled and awaited, then the error propagates.

    Args:
        etherscan: Etherscan client instance
        client: HTTP client instance
        block_numbers: Window of block numbers
        max_concurrency: Number of requests in flight at once
        on_outcome: Called once per finished block, in completion order

    Returns:
        One outcome per block number, in window order

    Example:
        ```python
        async with create_http_client() as client:
            outcomes = await fetch_blocks(etherscan, client, [1000, 999, 998])
            blocks = successful_blocks(outcomes)
        ```
    """
    if max_concurrency < 1:
        msg = "max_concurrency must be at least 1"
        raise ValueError(msg)

    semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_one(number: int) -> BlockFetchOutcome:
        async with semaphore:
            try:
                block = await etherscan.fetch_block(client, number)
            except BlockFetchError as e:
                logger.error("Error on block %d: %s", number, e)
                outcome = BlockFetchOutcome(number=number, error=str(e))
            else:
                outcome = BlockFetchOutcome(number=number, block=block)

        if on_outcome is not None:
            on_outcome(outcome)
        return outcome

    # A fault in one task cancels and awaits the others before propagating
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(fetch_one(n)) for n in block_numbers]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from eg

    return [task.result() for task in tasks]


def successful_blocks(outcomes: Sequence[BlockFetchOutcome]) -> list[Block]:
    """Get the blocks of the successful outcomes."""
    return [outcome.block for outcome in outcomes if outcome.block is not None]


__all__ = [
    "fetch_blocks",
    "successful_blocks",
]
