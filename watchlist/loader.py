"""
Watchlist Loader - Sequential batch fetch across tracked addresses.

Each address is fully resolved before the next begins. Errors from the
fetch layer propagate unchanged so the caller can show them verbatim.
"""

import logging
from typing import Iterable, Optional

from transfer_adapters.fetcher import TransferFetcher
from transfer_adapters.models import FetchOptions
from watchlist.models import TransferRow, WatchlistEntry, classify_direction


logger = logging.getLogger(__name__)


async def load_transfer_rows(
    fetcher: TransferFetcher,
    entries: Iterable[WatchlistEntry],
    options: Optional[FetchOptions] = None,
) -> list[TransferRow]:
    """Fetch transfers for every entry and return rows, newest first."""
    rows: list[TransferRow] = []

    for entry in entries:
        transfers = await fetcher.fetch_token_transfers(entry.address, options)
        logger.debug(f"Loaded {len(transfers)} transfers for {entry.address}")

        for transfer in transfers:
            rows.append(TransferRow(
                owner=entry,
                transfer=transfer,
                direction=classify_direction(transfer, entry.address),
            ))

    rows.sort(key=lambda row: row.transfer.timestamp, reverse=True)
    return rows
