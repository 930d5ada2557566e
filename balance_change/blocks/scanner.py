"""Scan blocks for the transaction that moved the most value."""

from collections.abc import Iterable

from balance_change.blocks.models import Block, LargestTransfer
from balance_change.helpers.errors import MalformedAmountError
from balance_change.helpers.logging import get_logger
from balance_change.helpers.parsers import parse_hex_amount


logger = get_logger(__name__)


def find_largest_transfer(blocks: Iterable[Block]) -> LargestTransfer:
    """Find the transaction with the largest absolute value.

    Only a strictly larger magnitude replaces the current winner, so ties
    keep the first transaction encountered and zero-value transactions never
    win. Transactions whose value cannot be parsed are skipped.

    Args:
        blocks: Fetched blocks, in any order

    Returns:
        The winning transfer, or ``LargestTransfer.empty()`` when no
        transaction moved any value
    """
    best = None
    best_magnitude = 0

    for block in blocks:
        for tx in block.transactions:
            try:
                magnitude = abs(parse_hex_amount(tx.value))
            except MalformedAmountError as e:
                logger.warning(
                    "Skipping transaction %s in block %d: %s",
                    tx.hash or "<no hash>",
                    block.number,
                    e,
                )
                continue

            if magnitude > best_magnitude:
                best = tx
                best_magnitude = magnitude

    if best is None:
        return LargestTransfer.empty()

    return LargestTransfer(
        sender=best.from_address,
        receiver=best.to_address,
        magnitude=best_magnitude,
    )


__all__ = ["find_largest_transfer"]
