"""
Watchlist Store - JSON file persistence for tracked addresses.

The watchlist is the only persisted state; fetched transfers never are.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from watchlist.models import WatchlistEntry


logger = logging.getLogger(__name__)


class WatchlistError(Exception):
    """Watchlist file could not be read."""


class WatchlistStore:
    """
    Ordered list of WatchlistEntry saved to a JSON file.

    File layout:
        {"updated_at": "...", "entries": [{"address": "0x..", "label": ""}]}
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def entries(self) -> list[WatchlistEntry]:
        """Load entries; a missing file is an empty watchlist."""
        if not self._path.exists():
            return []

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [WatchlistEntry.from_dict(item) for item in data.get("entries", [])]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise WatchlistError(f"Failed to read watchlist {self._path}: {e}") from e

    def add(self, address: str, label: str = "") -> WatchlistEntry:
        """Append an address; blank addresses are rejected."""
        address = address.strip()
        if not address:
            raise ValueError("address must not be empty")

        entry = WatchlistEntry(address=address, label=label.strip())
        entries = self.entries()
        entries.append(entry)
        self._save(entries)

        logger.info(f"Added {address} to watchlist")
        return entry

    def remove(self, index: int) -> WatchlistEntry:
        """Remove the entry at a zero-based index."""
        entries = self.entries()
        if index < 0 or index >= len(entries):
            raise IndexError(f"No watchlist entry at index {index}")

        entry = entries.pop(index)
        self._save(entries)

        logger.info(f"Removed {entry.address} from watchlist")
        return entry

    def clear(self) -> None:
        """Remove all entries."""
        self._save([])

    def _save(self, entries: list[WatchlistEntry]) -> None:
        data = {
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "entries": [e.to_dict() for e in entries],
        }

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
