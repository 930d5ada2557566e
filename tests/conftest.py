"""Pytest configuration and shared fixtures."""

import os

import pytest

from typing import Any

from collections.abc import Generator

import httpx

from balance_change.blocks.models import Block, Transaction
from balance_change.helpers.config import Settings
from balance_change.helpers.errors import BlockNotFoundError


ADDRESS_A = "0x" + "a" * 40
ADDRESS_B = "0x" + "b" * 40
ADDRESS_C = "0x" + "c" * 40
ADDRESS_D = "0x" + "d" * 40


class FakeEtherscan:
    """In-memory stand-in for EtherscanClient.

    Block numbers mapped to an exception raise it; numbers that are missing
    raise BlockNotFoundError.
    """

    def __init__(
        self,
        head: int | Exception,
        blocks: dict[int, Block | Exception] | None = None,
    ) -> None:
        self.head = head
        self.blocks = blocks or {}
        self.requested: list[int] = []

    async def fetch_head_number(self, client: httpx.AsyncClient) -> int:
        if isinstance(self.head, Exception):
            raise self.head
        return self.head

    async def fetch_block(self, client: httpx.AsyncClient, number: int) -> Block:
        self.requested.append(number)
        entry = self.blocks.get(number)
        if entry is None:
            msg = f"Block {number} not found"
            raise BlockNotFoundError(msg, number)
        if isinstance(entry, Exception):
            raise entry
        return entry


def make_tx(
    value: Any,
    sender: str = ADDRESS_A,
    receiver: str | None = ADDRESS_B,
    tx_hash: str | None = None,
) -> Transaction:
    """Build a transaction the way Etherscan would deliver it."""
    return Transaction.model_validate({
        "from": sender,
        "to": receiver,
        "value": value,
        "hash": tx_hash,
    })


def make_block(number: int, *transactions: Transaction) -> Block:
    return Block(number=number, transactions=transactions)


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake endpoint."""
    return Settings(
        api_url="https://api.test/api",
        api_key="test-key",
        number_of_blocks=3,
        max_concurrent_requests=2,
        max_attempts=3,
        retry_base_delay=0.0,
    )


@pytest.fixture
def clean_env() -> Generator[None]:
    """Clear configuration variables before the test and restore them after."""
    keys = [
        "ETHERSCAN_API_URL",
        "ETHERSCAN_API_KEY",
        "ETHERSCAN_CHAIN_ID",
        "NUMBER_OF_BLOCKS",
        "MAX_CONCURRENT_REQUESTS",
        "HTTP_TIMEOUT",
        "MAX_ATTEMPTS",
        "RETRY_BASE_DELAY",
        "FAIL_ON_EMPTY_WINDOW",
        "TEST_KEY",
    ]
    saved_env = {key: os.environ.get(key) for key in keys}

    for key in keys:
        os.environ.pop(key, None)

    yield

    for key, value in saved_env.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)
