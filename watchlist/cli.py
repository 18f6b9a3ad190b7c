"""
Watchlist - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line front end for the on-chain watchlist.

- Maintains the persisted watchlist (add / remove / list)
- Loads latest ERC-20 transfers for every watched address
- Prints a configuration hint when no API key is set
- Shows fetch errors verbatim

============================================================
USAGE
============================================================
onchain-watch add 0xabc... --label "treasury"
onchain-watch list
onchain-watch fetch --page-size 50
onchain-watch remove 0

============================================================
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from transfer_adapters.config import (
    COVALENT_API_KEY_ENV,
    ETHERSCAN_API_KEY_ENV,
    TransferFetchConfig,
)
from transfer_adapters.exceptions import TransferAdapterError
from transfer_adapters.fetcher import TransferFetcher
from transfer_adapters.models import FetchOptions
from watchlist.formatting import short_hash
from watchlist.loader import load_transfer_rows
from watchlist.models import TransferRow
from watchlist.store import WatchlistError, WatchlistStore


logger = logging.getLogger(__name__)


DEFAULT_WATCHLIST_PATH = "watchlist.json"


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="onchain-watch",
        description="Track wallet addresses and list their ERC-20 token transfers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
API keys are read from the environment (or a .env file):
  {ETHERSCAN_API_KEY_ENV}  - Etherscan V2, tried first
  {COVALENT_API_KEY_ENV}   - Covalent, fallback
        """,
    )

    parser.add_argument(
        "--watchlist",
        type=str,
        default=DEFAULT_WATCHLIST_PATH,
        metavar="PATH",
        help=f"Watchlist file (default: {DEFAULT_WATCHLIST_PATH})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add an address to the watchlist")
    add_parser.add_argument("address", help="Wallet address (0x...)")
    add_parser.add_argument("--label", default="", help="Optional label")

    remove_parser = subparsers.add_parser("remove", help="Remove an entry by index")
    remove_parser.add_argument("index", type=int, help="Index shown by 'list'")

    subparsers.add_parser("list", help="Show the watchlist")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch latest transfers")
    fetch_parser.add_argument(
        "--chain-id",
        type=int,
        default=1,
        help="EVM chain id (default: 1)",
    )
    fetch_parser.add_argument(
        "--page-size",
        type=int,
        default=50,
        help="Transfers per address (default: 50)",
    )
    fetch_parser.add_argument(
        "--json",
        action="store_true",
        help="Print rows as JSON",
    )

    return parser


# ============================================================
# COMMANDS
# ============================================================

def cmd_add(store: WatchlistStore, args: argparse.Namespace) -> int:
    entry = store.add(args.address, args.label)
    print(f"Added {entry.address}" + (f" ({entry.label})" if entry.label else ""))
    return 0


def cmd_remove(store: WatchlistStore, args: argparse.Namespace) -> int:
    entry = store.remove(args.index)
    print(f"Removed {entry.address}")
    return 0


def cmd_list(store: WatchlistStore, args: argparse.Namespace) -> int:
    entries = store.entries()
    if not entries:
        print("Watchlist is empty. Use 'add' to track an address.")
        return 0

    for i, entry in enumerate(entries):
        suffix = f"  - {entry.label}" if entry.label else ""
        print(f"  [{i}] {entry.address}{suffix}")
    return 0


async def cmd_fetch(
    store: WatchlistStore,
    args: argparse.Namespace,
    config: TransferFetchConfig,
) -> int:
    """Load transfers for every watched address and print them."""
    entries = store.entries()
    if not entries:
        print("Watchlist is empty. Use 'add' to track an address.")
        return 0

    options = FetchOptions(chain_id=args.chain_id, page_size=args.page_size)

    async with TransferFetcher(config) as fetcher:
        if not fetcher.has_any_api_key():
            print(
                f"No API key configured. Set {ETHERSCAN_API_KEY_ENV} or "
                f"{COVALENT_API_KEY_ENV} in the environment or .env to load data."
            )
        rows = await load_transfer_rows(fetcher, entries, options)

    if args.json:
        print(json.dumps([row.to_dict() for row in rows], indent=2))
    else:
        print_rows(rows)
    return 0


def print_rows(rows: List[TransferRow]) -> None:
    """Print transfer rows as a plain-text table."""
    if not rows:
        print("No transfers yet.")
        return

    print(
        f"{'Time (UTC)':19s}  {'Dir':5s}  {'Token':10s}  {'Amount':>24s}  "
        f"{'Counterparty':42s}  {'Label':12s}  Tx"
    )
    print("-" * 136)
    for row in rows:
        print(
            f"{row.transfer.timestamp:%Y-%m-%d %H:%M:%S}  "
            f"{row.direction.value:5s}  "
            f"{row.token_display[:10]:10s}  "
            f"{row.amount:>24s}  "
            f"{row.counterparty:42s}  "
            f"{row.owner.label[:12]:12s}  "
            f"{short_hash(row.transfer.transaction_hash or '')}"
        )


# ============================================================
# MAIN ENTRY POINT
# ============================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)-5s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    store = WatchlistStore(args.watchlist)

    try:
        if args.command == "add":
            return cmd_add(store, args)
        if args.command == "remove":
            return cmd_remove(store, args)
        if args.command == "list":
            return cmd_list(store, args)

        config = TransferFetchConfig.from_env()
        return asyncio.run(cmd_fetch(store, args, config))

    except TransferAdapterError as e:
        logger.debug(f"Fetch failed: {e.to_dict()}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except (WatchlistError, ValueError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


# ============================================================
# MODULE EXECUTION
# ============================================================

if __name__ == "__main__":
    sys.exit(main())
