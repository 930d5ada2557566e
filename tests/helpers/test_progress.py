"""Tests for progress bar utilities."""

from io import StringIO

from rich.console import Console
from rich.progress import Progress

from balance_change.blocks.models import Block, BlockFetchOutcome
from balance_change.helpers.progress import create_fetch_progress, track_block_fetches


def quiet_console() -> Console:
    return Console(file=StringIO(), force_terminal=False)


def test_create_fetch_progress() -> None:
    progress = create_fetch_progress(quiet_console())

    assert isinstance(progress, Progress)
    assert len(progress.columns) == 6


def test_track_block_fetches_advances_per_outcome() -> None:
    progress = create_fetch_progress(quiet_console())

    with track_block_fetches(3, progress=progress) as on_outcome:
        on_outcome(BlockFetchOutcome(number=3, block=Block(number=3)))
        on_outcome(BlockFetchOutcome(number=1, block=Block(number=1)))

    task = progress.tasks[0]
    assert task.total == 3
    assert task.completed == 2
    assert task.description == "Fetching blocks"


def test_track_block_fetches_reports_failures() -> None:
    progress = create_fetch_progress(quiet_console())

    with track_block_fetches(2, progress=progress) as on_outcome:
        on_outcome(BlockFetchOutcome(number=2, error="not found"))
        on_outcome(BlockFetchOutcome(number=1, error="timeout"))

    task = progress.tasks[0]
    assert task.completed == 2
    assert "2 failed" in task.description
