"""
Base Transfer Provider - Abstract interface for token transfer providers.

All providers MUST:
- Fail with ConfigurationError before any network call when unkeyed
- Return a fresh list of TokenTransfer records with their own source tag
- Keep raw amounts as strings
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from transfer_adapters.exceptions import ConfigurationError
from transfer_adapters.models import (
    DEFAULT_TOKEN_DECIMALS,
    FetchOptions,
    TokenTransfer,
    TransferSource,
)
from transfer_adapters.schemas import parse_token_decimals
from transfer_adapters.transport import HttpTransport


logger = logging.getLogger(__name__)


class BaseTransferProvider(ABC):
    """
    Abstract base class for all token transfer providers.

    Each provider must:
    1. Implement fetch_raw() - Get the raw JSON body from the provider
    2. Implement normalize() - Convert it to TokenTransfer records
    3. Declare source and credential_key
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._api_key = api_key or None
        self._transport = transport or HttpTransport()
        self._owns_transport = transport is None

    @property
    @abstractmethod
    def source(self) -> TransferSource:
        """Literal stamped on every record this provider produces."""
        pass

    @property
    @abstractmethod
    def credential_key(self) -> str:
        """Environment variable name of the credential."""
        pass

    @property
    def name(self) -> str:
        """Unique identifier."""
        return self.source.value

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    @abstractmethod
    async def fetch_raw(
        self,
        address: str,
        options: FetchOptions,
    ) -> Any:
        """
        Fetch the raw response body from the provider API.

        Raises:
            TransportError: If the HTTP call fails
        """
        pass

    @abstractmethod
    def normalize(self, raw_data: Any) -> list[TokenTransfer]:
        """
        Normalize a raw response body to TokenTransfer records.

        Raises:
            ProviderError: If the body reports a data-level problem
            NormalizationError: If a record cannot be mapped
        """
        pass

    async def fetch_transfers(
        self,
        address: str,
        options: Optional[FetchOptions] = None,
    ) -> list[TokenTransfer]:
        """
        Fetch and normalize one page of token transfers (main entry point).

        Unlike the fetcher, this raises on every failure.
        """
        self._require_api_key()
        options = options or FetchOptions()
        options.validate()

        raw_data = await self.fetch_raw(address, options)
        transfers = self.normalize(raw_data)

        logger.debug(f"[{self.name}] {len(transfers)} transfers for {address}")
        return transfers

    def _require_api_key(self) -> str:
        """Return the credential or fail before touching the network."""
        if not self._api_key:
            raise ConfigurationError(
                message=f"Missing {self.credential_key}",
                adapter_name=self.name,
                config_key=self.credential_key,
            )
        return self._api_key

    # ─────────────────────────────────────────────────────────────
    # Normalization Helpers
    # ─────────────────────────────────────────────────────────────

    def _resolve_timestamp(self, parsed: Optional[datetime], raw: Any) -> datetime:
        """Fall back to the current time when the provider time is unusable."""
        if parsed is not None:
            return parsed
        if raw not in (None, ""):
            logger.warning(f"[{self.name}] Unparseable timestamp {raw!r}, using now")
        return datetime.now(timezone.utc)

    def _resolve_decimals(self, raw: Any) -> int:
        """Parse a decimal count, defaulting to 18."""
        decimals = parse_token_decimals(raw)
        if decimals is not None:
            return decimals
        if raw not in (None, ""):
            logger.warning(
                f"[{self.name}] Invalid token decimals {raw!r}, "
                f"using {DEFAULT_TOKEN_DECIMALS}"
            )
        return DEFAULT_TOKEN_DECIMALS

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    async def close(self) -> None:
        """Close resources."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "BaseTransferProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name}, keyed={self.has_api_key})>"
