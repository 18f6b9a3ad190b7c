"""
Raw Provider Schemas - Explicit input shapes for each provider.

Each provider gets its own dataclasses naming exactly the fields it sends.
The Etherscan response envelope varies across chains and endpoints, so it
is parsed into one of three tagged variants, tried in order:

    1. EtherscanTransferList   - result is a list (with or without status flag)
    2. EtherscanNoTransactions - message says no transactions were found
    3. EtherscanErrorResponse  - anything else
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union

from transfer_adapters.exceptions import NormalizationError


NO_TRANSACTIONS_PATTERN = re.compile(r"no transactions", re.IGNORECASE)


# ─────────────────────────────────────────────────────────────
# Field Helpers
# ─────────────────────────────────────────────────────────────

def optional_str(value: Any) -> Optional[str]:
    """Return value as a string, or None when absent or empty."""
    if value is None or value == "":
        return None
    return str(value)


def raw_amount(value: Any) -> str:
    """Keep a minimal-unit amount as a string without numeric parsing."""
    if value is None or value == "":
        return "0"
    return str(value)


def parse_unix_seconds(value: Any) -> Optional[datetime]:
    """Parse a Unix-seconds timestamp (string or int) into UTC."""
    if value is None or isinstance(value, bool):
        return None
    try:
        seconds = int(str(value).strip())
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_iso_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_token_decimals(value: Any) -> Optional[int]:
    """Parse a decimal count; None when absent, malformed or negative."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, int):
        decimals = value
    else:
        try:
            decimals = int(str(value).strip())
        except ValueError:
            return None
    return decimals if decimals >= 0 else None


def _require_mapping(raw: Any, adapter_name: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise NormalizationError(
            message=f"Expected a JSON object, got {type(raw).__name__}",
            adapter_name=adapter_name,
            raw_data=raw,
        )
    return raw


# ─────────────────────────────────────────────────────────────
# Etherscan
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EtherscanTokenTx:
    """One row of Etherscan's account/tokentx result."""
    hash: Optional[str]
    time_stamp: Any
    from_address: str
    to_address: str
    token_symbol: Optional[str]
    token_name: Optional[str]
    contract_address: Optional[str]
    value: str
    token_decimal: Any

    @classmethod
    def from_dict(cls, raw: Any) -> "EtherscanTokenTx":
        """Create from a raw result row."""
        data = _require_mapping(raw, "etherscan")
        return cls(
            # Some chain variants send transactionHash instead of hash
            hash=optional_str(data.get("hash")) or optional_str(data.get("transactionHash")),
            time_stamp=data.get("timeStamp"),
            from_address=str(data.get("from") or ""),
            to_address=str(data.get("to") or ""),
            token_symbol=optional_str(data.get("tokenSymbol")),
            token_name=optional_str(data.get("tokenName")),
            contract_address=optional_str(data.get("contractAddress")),
            value=raw_amount(data.get("value")),
            token_decimal=data.get("tokenDecimal"),
        )


@dataclass(frozen=True)
class EtherscanTransferList:
    """Result carried a list of token transactions."""
    transactions: list[EtherscanTokenTx]


@dataclass(frozen=True)
class EtherscanNoTransactions:
    """Provider confirmed there is nothing to return."""
    message: str


@dataclass(frozen=True)
class EtherscanErrorResponse:
    """Unrecognized shape; message and a dump of result for diagnosis."""
    message: str
    detail: str


EtherscanResponse = Union[
    EtherscanTransferList,
    EtherscanNoTransactions,
    EtherscanErrorResponse,
]


def parse_etherscan_response(payload: Any) -> EtherscanResponse:
    """Parse an Etherscan envelope into exactly one known variant."""
    body = payload if isinstance(payload, dict) else {}
    result = body.get("result")

    if isinstance(result, list):
        return EtherscanTransferList(
            transactions=[EtherscanTokenTx.from_dict(row) for row in result],
        )

    if body.get("status") == "1" or body.get("message") == "OK":
        if result is None:
            return EtherscanTransferList(transactions=[])

    message = body.get("message") or ""
    if not isinstance(message, str):
        message = str(message)

    if NO_TRANSACTIONS_PATTERN.search(message):
        return EtherscanNoTransactions(message=message)

    detail = result if isinstance(result, str) else json.dumps(result, default=str)
    return EtherscanErrorResponse(message=message, detail=detail)


# ─────────────────────────────────────────────────────────────
# Covalent
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CovalentTransferEvent:
    """One token movement nested inside a Covalent transaction item."""
    from_address: str
    to_address: str
    contract_ticker_symbol: Optional[str]
    contract_name: Optional[str]
    contract_address: Optional[str]
    delta: str
    contract_decimals: Any

    @classmethod
    def from_dict(cls, raw: Any) -> "CovalentTransferEvent":
        """Create from a raw transfers[] entry."""
        data = _require_mapping(raw, "covalent")
        return cls(
            from_address=str(data.get("from_address") or ""),
            to_address=str(data.get("to_address") or ""),
            contract_ticker_symbol=optional_str(data.get("contract_ticker_symbol")),
            contract_name=optional_str(data.get("contract_name")),
            contract_address=optional_str(data.get("contract_address")),
            delta=raw_amount(data.get("delta")),
            contract_decimals=data.get("contract_decimals"),
        )


@dataclass(frozen=True)
class CovalentTransaction:
    """One data.items[] entry of the transfers_v2 endpoint."""
    tx_hash: Optional[str]
    block_signed_at: Any
    transfers: tuple[CovalentTransferEvent, ...]

    @classmethod
    def from_dict(cls, raw: Any) -> "CovalentTransaction":
        """Create from a raw data.items[] entry."""
        data = _require_mapping(raw, "covalent")
        return cls(
            tx_hash=optional_str(data.get("tx_hash")),
            block_signed_at=data.get("block_signed_at"),
            transfers=tuple(
                CovalentTransferEvent.from_dict(t) for t in (data.get("transfers") or [])
            ),
        )


def parse_covalent_items(payload: Any) -> list[CovalentTransaction]:
    """Extract data.items[]; a missing data or items block means no transfers."""
    body = payload if isinstance(payload, dict) else {}
    data = body.get("data") or {}
    items = data.get("items") if isinstance(data, dict) else None
    return [CovalentTransaction.from_dict(item) for item in (items or [])]
