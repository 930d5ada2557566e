"""Block number window utilities."""


def get_recent_block_numbers(head: int, count: int) -> list[int]:
    """Get the most recent block numbers, newest first.

    Args:
        head: Latest block number
        count: How many blocks to include

    Returns:
        Strictly descending block numbers, ``min(count, head + 1)`` long
        and never below block 0

    Raises:
        ValueError: If head or count is negative

    Example:
        >>> get_recent_block_numbers(1000, 3)
        [1000, 999, 998]
        >>> get_recent_block_numbers(1, 5)
        [1, 0]
    """
    if head < 0:
        msg = f"head cannot be negative: {head}"
        raise ValueError(msg)
    if count < 0:
        msg = f"count cannot be negative: {count}"
        raise ValueError(msg)

    return list(range(head, max(head - count, -1), -1))


__all__ = ["get_recent_block_numbers"]
