"""
Watchlist Models - Tracked addresses and display rows.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from transfer_adapters.models import TokenTransfer
from watchlist.formatting import format_token_amount


EXPLORER_TX_URL = "https://etherscan.io/tx/{tx_hash}"


class TransferDirection(Enum):
    """Direction of a transfer relative to the watched address."""
    IN = "IN"
    OUT = "OUT"
    OTHER = "OTHER"


def classify_direction(transfer: TokenTransfer, address: str) -> TransferDirection:
    """Compare sender/recipient with the watched address, ignoring case."""
    watched = address.lower()
    if transfer.from_address.lower() == watched:
        return TransferDirection.OUT
    if transfer.to_address.lower() == watched:
        return TransferDirection.IN
    return TransferDirection.OTHER


@dataclass(frozen=True)
class WatchlistEntry:
    """A tracked wallet address with an optional label."""
    address: str
    label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchlistEntry":
        return cls(
            address=str(data["address"]),
            label=str(data.get("label") or ""),
        )


@dataclass(frozen=True)
class TransferRow:
    """One table row: a transfer seen from a watchlist entry's perspective."""
    owner: WatchlistEntry
    transfer: TokenTransfer
    direction: TransferDirection

    @property
    def amount(self) -> str:
        return format_token_amount(self.transfer.raw_value, self.transfer.token_decimals)

    @property
    def counterparty(self) -> str:
        if self.direction == TransferDirection.OUT:
            return self.transfer.to_address
        if self.direction == TransferDirection.IN:
            return self.transfer.from_address
        return ""

    @property
    def token_display(self) -> str:
        return self.transfer.token_symbol or self.transfer.token_name or "-"

    @property
    def explorer_url(self) -> Optional[str]:
        if not self.transfer.transaction_hash:
            return None
        return EXPLORER_TX_URL.format(tx_hash=self.transfer.transaction_hash)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data = self.transfer.to_dict()
        data.update({
            "owner": self.owner.to_dict(),
            "direction": self.direction.value,
            "amount": self.amount,
            "counterparty": self.counterparty,
            "explorer_url": self.explorer_url,
        })
        return data
