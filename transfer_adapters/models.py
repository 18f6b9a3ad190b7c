"""
Transfer Data Models - Canonical token transfer record and fetch options.

Records are transient: rebuilt on every fetch, never merged or deduplicated.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


DEFAULT_TOKEN_DECIMALS = 18


class TransferSource(Enum):
    """Provider that produced a record."""
    ETHERSCAN = "etherscan"
    COVALENT = "covalent"


class SortOrder(Enum):
    """Sort order accepted by the Etherscan account endpoints."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class TokenTransfer:
    """
    Normalized token transfer - STRICT schema.

    raw_value is the smallest-unit integer amount exactly as the provider
    returned it. It is never parsed to a number.
    """
    source: TransferSource
    transaction_hash: Optional[str]
    timestamp: datetime

    from_address: str
    to_address: str

    token_symbol: Optional[str] = None
    token_name: Optional[str] = None
    contract_address: Optional[str] = None

    raw_value: str = "0"
    token_decimals: int = DEFAULT_TOKEN_DECIMALS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source": self.source.value,
            "transaction_hash": self.transaction_hash,
            "timestamp": self.timestamp.isoformat(),
            "from_address": self.from_address,
            "to_address": self.to_address,
            "token_symbol": self.token_symbol,
            "token_name": self.token_name,
            "contract_address": self.contract_address,
            "raw_value": self.raw_value,
            "token_decimals": self.token_decimals,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenTransfer":
        """Create from dictionary."""
        return cls(
            source=TransferSource(data["source"]),
            transaction_hash=data.get("transaction_hash"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            from_address=data.get("from_address", ""),
            to_address=data.get("to_address", ""),
            token_symbol=data.get("token_symbol"),
            token_name=data.get("token_name"),
            contract_address=data.get("contract_address"),
            raw_value=str(data.get("raw_value", "0")),
            token_decimals=int(data.get("token_decimals", DEFAULT_TOKEN_DECIMALS)),
        )


@dataclass
class FetchOptions:
    """
    Request parameters for a single-page transfer fetch.

    Covalent only honours chain_id and page_size.
    """
    chain_id: int = 1
    page: int = 1
    page_size: int = 50
    sort: SortOrder = SortOrder.DESC

    def validate(self) -> None:
        """Validate request parameters."""
        if self.chain_id < 1:
            raise ValueError("chain_id must be positive")
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
