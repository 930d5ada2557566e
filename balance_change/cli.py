"""Command line entry point.

Usage:
    python -m balance_change.cli query [--blocks N]
    python -m balance_change.cli serve [--host HOST] [--port PORT]
"""

from argparse import ArgumentParser
from asyncio import run
import sys

from rich.console import Console
from rich.table import Table
import uvicorn

from balance_change.blocks.models import RecentBalanceChange
from balance_change.helpers.config import Settings
from balance_change.helpers.errors import QueryFailedError
from balance_change.helpers.progress import track_block_fetches
from balance_change.service import BalanceChangeService


console = Console()


def display_result(result: RecentBalanceChange, blocks: int) -> None:
    """Print the query result as a table."""
    table = Table(title=f"Largest balance change in the last {blocks} blocks")
    table.add_column("Sender", style="cyan")
    table.add_column("Receiver", style="magenta")
    table.add_column("Amount (ETH)", justify="right", style="green")

    table.add_row(
        result.sender or "[dim]-[/dim]",
        result.receiver or "[dim]-[/dim]",
        result.balance_change,
    )
    console.print(table)


async def query(blocks: int | None) -> int:
    """Run a single query and print it.

    Returns:
        Process exit code
    """
    settings = Settings.from_env()
    count = settings.number_of_blocks if blocks is None else blocks
    service = BalanceChangeService(settings)

    with track_block_fetches(count, console) as on_outcome:
        try:
            result = await service.get_largest_recent_balance_change(
                number_of_blocks=count, on_outcome=on_outcome
            )
        except QueryFailedError:
            console.print("[red]Query failed, see logs for details[/red]")
            return 1

    display_result(result, count)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(description="Largest balance change in recent blocks")
    subparsers = parser.add_subparsers(dest="command", required=True)

    query_parser = subparsers.add_parser("query", help="Run one query and print it")
    query_parser.add_argument(
        "--blocks",
        type=int,
        default=None,
        help="Number of recent blocks to scan (default: NUMBER_OF_BLOCKS or 100)",
    )

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "query":
        if args.blocks is not None and args.blocks < 0:
            parser.error("--blocks cannot be negative")
        return run(query(args.blocks))

    uvicorn.run(
        "balance_change.api:create_app", factory=True, host=args.host, port=args.port
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
