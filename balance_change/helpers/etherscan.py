"""Etherscan proxy API client for chain head and block lookups."""

from typing import Any

import httpx
from pydantic import ValidationError

from balance_change.blocks.models import Block, Transaction
from balance_change.helpers.constants import DEFAULT_TIMEOUT
from balance_change.helpers.errors import (
    BlockNotFoundError,
    InvalidHeadResponseError,
    MalformedBlockError,
    RateLimitError,
    RemoteApiError,
    TransportError,
)
from balance_change.helpers.etherscan_models import (
    EthBlockNumberRequest,
    EthGetBlockByNumberRequest,
    EtherscanProxyRequest,
    EtherscanResponse,
)
from balance_change.helpers.http import RetryPolicy
from balance_change.helpers.logging import get_logger
from balance_change.helpers.parsers import parse_hex_quantity, to_hex_tag


logger = get_logger(__name__)


class EtherscanClient:
    """Etherscan proxy client with retries on transient failures."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        chain_id: int | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize Etherscan client.

        Args:
            api_url: Etherscan API endpoint URL
            api_key: Etherscan API key
            chain_id: Chain id sent as ``chainid`` (v2 endpoints only)
            timeout: Default timeout for requests in seconds
            retry_policy: Policy wrapping every remote call

        Raises:
            ValueError: If api_url or api_key is empty or None
        """
        if not api_url:
            msg = "Etherscan API URL cannot be empty"
            raise ValueError(msg)
        if not api_key:
            msg = "Etherscan API key cannot be empty"
            raise ValueError(msg)

        self.api_url = api_url
        self.api_key = api_key
        self.chain_id = chain_id
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()

    async def _get_once(
        self,
        client: httpx.AsyncClient,
        request: EtherscanProxyRequest,
        block_number: int | None = None,
    ) -> EtherscanResponse:
        """Make a single GET call without retries.

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RateLimitError: If Etherscan throttled the call
            RemoteApiError: If the body is not a usable Etherscan answer
        """
        response = await client.get(
            self.api_url, params=request.to_params(), timeout=self.timeout
        )
        response.raise_for_status()

        try:
            body = EtherscanResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            msg = f"Unreadable {request.action} response"
            raise RemoteApiError(msg, block_number) from e

        if body.is_rate_limited:
            msg = f"Etherscan rate limit: {body.result or body.message}"
            raise RateLimitError(msg, block_number)
        if body.error is not None:
            msg = f"Etherscan error on {request.action}: {body.error}"
            raise RemoteApiError(msg, block_number)
        if body.status == "0":
            msg = f"Etherscan error on {request.action}: {body.message} {body.result}"
            raise RemoteApiError(msg, block_number)

        return body

    async def _get(
        self,
        client: httpx.AsyncClient,
        request: EtherscanProxyRequest,
        block_number: int | None = None,
    ) -> EtherscanResponse:
        try:
            return await self.retry_policy.run(
                self._get_once, client, request, block_number
            )
        except httpx.HTTPError as e:
            msg = f"{request.action} failed: {e!r}"
            raise TransportError(msg, block_number) from e

    async def fetch_head_number(self, client: httpx.AsyncClient) -> int:
        """Get the latest block number.

        Args:
            client: HTTP client instance

        Returns:
            Latest block number

        Raises:
            InvalidHeadResponseError: If the result is not a hex block number
            TransportError: If the network kept failing after retries
            RemoteApiError: If Etherscan answered with an error
        """
        request = EthBlockNumberRequest(apikey=self.api_key, chainid=self.chain_id)
        body = await self._get(client, request)

        try:
            head = parse_hex_quantity(body.result)
        except ValueError as e:
            msg = f"Got incorrect block number from Etherscan: {body.result!r}"
            raise InvalidHeadResponseError(msg) from e
        if head < 0:
            msg = f"Got negative block number from Etherscan: {body.result!r}"
            raise InvalidHeadResponseError(msg)

        logger.debug("Got latest block number: %d", head)
        return head

    async def fetch_block(self, client: httpx.AsyncClient, number: int) -> Block:
        """Get a block with full transaction objects.

        A transaction that does not validate is logged and left out; the rest
        of the block is kept.

        Args:
            client: HTTP client instance
            number: Block number

        Returns:
            Parsed block

        Raises:
            BlockNotFoundError: If Etherscan has no block for this number
            MalformedBlockError: If the payload carries no transaction objects
            TransportError: If the network kept failing after retries
            RemoteApiError: If Etherscan answered with an error
        """
        request = EthGetBlockByNumberRequest(
            apikey=self.api_key, chainid=self.chain_id, tag=to_hex_tag(number)
        )
        body = await self._get(client, request, number)

        result: Any = body.result
        if not result:
            msg = f"Block {number} not found"
            raise BlockNotFoundError(msg, number)
        if not isinstance(result, dict):
            msg = f"Block {number} payload is not an object"
            raise MalformedBlockError(msg, number)

        raw_transactions = result.get("transactions") or []
        if not isinstance(raw_transactions, list) or not all(
            isinstance(raw, dict) for raw in raw_transactions
        ):
            msg = f"Block {number} payload has no full transaction objects"
            raise MalformedBlockError(msg, number)

        transactions: list[Transaction] = []
        for index, raw in enumerate(raw_transactions):
            try:
                transactions.append(Transaction.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    "Skipping transaction %s (#%d) in block %d: %d validation errors",
                    raw.get("hash"),
                    index,
                    number,
                    e.error_count(),
                )

        block = Block(number=number, transactions=tuple(transactions))

        logger.debug(
            "Fetched block %d with %d transactions", number, len(block.transactions)
        )
        return block


__all__ = ["EtherscanClient"]
