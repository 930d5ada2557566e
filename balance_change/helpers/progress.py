"""Progress bar utilities for Rich console displays."""

from contextlib import contextmanager

from collections.abc import Callable, Iterator

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from balance_change.blocks.models import BlockFetchOutcome


def create_fetch_progress(
    console: Console | None = None, *, expand: bool = False
) -> Progress:
    """Create a progress bar for block fetches.

    Args:
        console: Rich console instance (optional)
        expand: Whether to expand the progress bar to full width

    Returns:
        Configured Progress instance with spinner, description, bar,
        M of N counter and time elapsed
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        console=console,
        expand=expand,
    )


@contextmanager
def track_block_fetches(
    total: int,
    console: Console | None = None,
    progress: Progress | None = None,
) -> Iterator[Callable[[BlockFetchOutcome], None]]:
    """Context manager yielding a callback that advances a fetch progress bar.

    Failed blocks are counted too and reported in the description.

    Args:
        total: Number of blocks in the window
        console: Rich console instance (optional)
        progress: Progress instance to use instead of a new fetch progress

    Example:
        ```python
        with track_block_fetches(len(numbers)) as on_outcome:
            outcomes = await fetch_blocks(etherscan, client, numbers, on_outcome=on_outcome)
        ```
    """
    progress = progress or create_fetch_progress(console)
    failed = 0

    with progress:
        task_id = progress.add_task("Fetching blocks", total=total)

        def on_outcome(outcome: BlockFetchOutcome) -> None:
            nonlocal failed
            if not outcome.ok:
                failed += 1
                progress.update(
                    task_id,
                    description=f"Fetching blocks [red]({failed} failed)[/red]",
                )
            progress.update(task_id, advance=1)

        yield on_outcome


__all__ = [
    "create_fetch_progress",
    "track_block_fetches",
]
