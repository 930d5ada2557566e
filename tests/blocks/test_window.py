"""Tests for the block number window."""

import pytest

from balance_change.blocks.window import get_recent_block_numbers


def test_example_window() -> None:
    """Test the three most recent blocks below a head of 1000."""
    assert get_recent_block_numbers(1000, 3) == [1000, 999, 998]


def test_zero_count_is_empty() -> None:
    assert get_recent_block_numbers(1000, 0) == []


def test_head_zero_yields_genesis_only() -> None:
    assert get_recent_block_numbers(0, 0) == []
    assert get_recent_block_numbers(0, 1) == [0]
    assert get_recent_block_numbers(0, 100) == [0]


def test_includes_genesis_when_window_reaches_it() -> None:
    assert get_recent_block_numbers(2, 3) == [2, 1, 0]
    assert get_recent_block_numbers(2, 10) == [2, 1, 0]


def test_large_head() -> None:
    """Test heads beyond the signed 32-bit range."""
    head = 2**40
    assert get_recent_block_numbers(head, 2) == [head, head - 1]


@pytest.mark.parametrize("head", [0, 1, 2, 5, 99, 100, 101, 1000])
@pytest.mark.parametrize("count", [0, 1, 2, 5, 100, 101, 2000])
def test_window_properties(head: int, count: int) -> None:
    """Test length, ordering and lower bound for a grid of inputs."""
    window = get_recent_block_numbers(head, count)

    assert len(window) == min(count, head + 1)
    assert all(a > b for a, b in zip(window, window[1:], strict=False))
    if window:
        assert window[0] == head
        assert min(window) >= 0


@pytest.mark.parametrize(("head", "count"), [(-1, 3), (10, -1)])
def test_negative_inputs_raise(head: int, count: int) -> None:
    with pytest.raises(ValueError, match="cannot be negative"):
        get_recent_block_numbers(head, count)
