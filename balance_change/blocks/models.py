"""Pydantic models for blocks, transactions and query results."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from balance_change.helpers.parsers import format_ether


class Transaction(BaseModel):
    """Transaction as delivered inside a fully expanded block."""

    from_address: str = Field(..., description="Sender address", alias="from")
    to_address: str | None = Field(
        default=None,
        description="Receiver address, absent for contract creation",
        alias="to",
    )
    value: str | None = Field(
        default=None, description="Transferred amount in wei as hex string"
    )
    hash: str | None = Field(default=None, description="Transaction hash")

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class Block(BaseModel):
    """Block with its transaction bodies."""

    number: int = Field(..., ge=0, description="Block number")
    transactions: tuple[Transaction, ...] = Field(default=())

    model_config = ConfigDict(frozen=True, extra="ignore")


class BlockFetchOutcome(BaseModel):
    """Result of fetching a single block of the window."""

    number: int
    block: Block | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.block is not None


class LargestTransfer(BaseModel):
    """Transaction with the largest magnitude found by a scan."""

    sender: str | None = None
    receiver: str | None = None
    magnitude: int = Field(default=0, ge=0, description="Amount in wei")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> Self:
        """Sentinel for a scan that saw no transfer of value."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.sender is None and self.magnitude == 0


class RecentBalanceChange(BaseModel):
    """Query result served to API consumers."""

    sender: str = Field(..., description="Sender address, empty when none")
    receiver: str = Field(..., description="Receiver address, empty when none")
    balance_change: str = Field(
        ..., description="Amount in ether as exact decimal", alias="balanceChange"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_transfer(cls, transfer: LargestTransfer) -> Self:
        """Render a scan result, using empty strings for absent addresses."""
        return cls(
            sender=transfer.sender or "",
            receiver=transfer.receiver or "",
            balance_change=format_ether(transfer.magnitude),
        )


__all__ = [
    "Block",
    "BlockFetchOutcome",
    "LargestTransfer",
    "RecentBalanceChange",
    "Transaction",
]
