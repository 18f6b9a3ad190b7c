"""
Watchlist Package - Tracked addresses and transfer display.

Owns the persisted watchlist and turns normalized transfers from
transfer_adapters into sorted, direction-annotated rows.
"""

from watchlist.formatting import format_token_amount, short_hash
from watchlist.loader import load_transfer_rows
from watchlist.models import (
    TransferDirection,
    TransferRow,
    WatchlistEntry,
    classify_direction,
)
from watchlist.store import WatchlistError, WatchlistStore


__all__ = [
    "TransferDirection",
    "TransferRow",
    "WatchlistEntry",
    "WatchlistError",
    "WatchlistStore",
    "classify_direction",
    "format_token_amount",
    "load_transfer_rows",
    "short_hash",
]
