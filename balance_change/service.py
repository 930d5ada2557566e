"""Largest recent balance change query.

Processing flow:
1. Resolve the chain head
2. Compute the window of the N most recent block numbers
3. Fetch the window concurrently, dropping blocks that keep failing
4. Scan every fetched transaction for the largest absolute value
5. Format the winner as sender, receiver and an exact ether amount

Any failure that cannot be absorbed is logged with its cause and surfaced as
a single QueryFailedError.
"""

from collections.abc import Callable

import httpx

from balance_change.blocks.fetcher import fetch_blocks, successful_blocks
from balance_change.blocks.models import BlockFetchOutcome, RecentBalanceChange
from balance_change.blocks.scanner import find_largest_transfer
from balance_change.blocks.window import get_recent_block_numbers
from balance_change.helpers.config import Settings
from balance_change.helpers.errors import QueryFailedError
from balance_change.helpers.etherscan import EtherscanClient
from balance_change.helpers.http import RetryPolicy, create_http_client
from balance_change.helpers.logging import get_logger


logger = get_logger(__name__)


class BalanceChangeService:
    """Finds the largest balance change among the most recent blocks."""

    def __init__(
        self,
        settings: Settings,
        etherscan: EtherscanClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Immutable process configuration
            etherscan: Client to use instead of one built from settings
        """
        self.settings = settings
        self.etherscan = etherscan or EtherscanClient(
            settings.api_url,
            settings.api_key,
            chain_id=settings.chain_id,
            timeout=settings.timeout,
            retry_policy=RetryPolicy(
                max_attempts=settings.max_attempts,
                base_delay=settings.retry_base_delay,
            ),
        )

    async def get_largest_recent_balance_change(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        number_of_blocks: int | None = None,
        on_outcome: Callable[[BlockFetchOutcome], None] | None = None,
    ) -> RecentBalanceChange:
        """Run one query.

        Args:
            client: HTTP client instance, created for this query if omitted
            number_of_blocks: Window size override (defaults to settings)
            on_outcome: Called once per fetched or failed block

        Returns:
            Sender, receiver and amount of the largest transfer

        Raises:
            QueryFailedError: If the head lookup or anything unexpected failed
        """
        logger.info("Searching largest balance change")

        try:
            if client is None:
                async with create_http_client(timeout=self.settings.timeout) as own_client:
                    return await self._run(own_client, number_of_blocks, on_outcome)
            return await self._run(client, number_of_blocks, on_outcome)
        except QueryFailedError:
            raise
        except Exception as e:
            logger.exception("Error: %s", e)
            msg = "Error"
            raise QueryFailedError(msg) from e

    async def _run(
        self,
        client: httpx.AsyncClient,
        number_of_blocks: int | None,
        on_outcome: Callable[[BlockFetchOutcome], None] | None,
    ) -> RecentBalanceChange:
        head = await self.etherscan.fetch_head_number(client)
        logger.debug("Latest block id: %d", head)

        count = (
            self.settings.number_of_blocks if number_of_blocks is None else number_of_blocks
        )
        block_numbers = get_recent_block_numbers(head, count)
        if block_numbers:
            logger.debug(
                "Handling blocks from %d to %d", block_numbers[-1], block_numbers[0]
            )

        outcomes = await fetch_blocks(
            self.etherscan,
            client,
            block_numbers,
            max_concurrency=self.settings.max_concurrent_requests,
            on_outcome=on_outcome,
        )
        blocks = successful_blocks(outcomes)
        logger.info("Fetched %d of %d blocks", len(blocks), len(block_numbers))

        if block_numbers and not blocks:
            if self.settings.fail_on_empty_window:
                msg = "Error"
                logger.error("No block of the window could be fetched")
                raise QueryFailedError(msg)
            logger.warning("No block of the window could be fetched, result is empty")

        transfer = find_largest_transfer(blocks)
        result = RecentBalanceChange.from_transfer(transfer)

        logger.info(
            "Largest balance change: %s ETH. Sender: %s, receiver: %s",
            result.balance_change,
            result.sender,
            result.receiver,
        )
        return result


__all__ = ["BalanceChangeService"]
