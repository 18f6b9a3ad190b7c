"""
Transfer Fetcher - Public entry point with provider fallback.

Selection policy (decided from configured credentials on every call):

    Etherscan keyed  -> Etherscan; on any failure -> Covalent if keyed,
                        otherwise the original Etherscan error is re-raised
    Covalent only    -> Covalent, outcome returned as-is
    No keys          -> [] (no network call; the UI shows a config hint)

Calls are sequential; at most one provider request is in flight.
"""

import logging
from typing import Optional

from transfer_adapters.base import BaseTransferProvider
from transfer_adapters.config import TransferFetchConfig, get_default_config
from transfer_adapters.models import FetchOptions, TokenTransfer
from transfer_adapters.providers.covalent import CovalentProvider
from transfer_adapters.providers.etherscan import EtherscanProvider
from transfer_adapters.transport import HttpTransport


logger = logging.getLogger(__name__)


class TransferFetcher:
    """
    Fetch orchestrator over the Etherscan and Covalent providers.

    Usage:
        config = TransferFetchConfig.from_env()
        async with TransferFetcher(config) as fetcher:
            if not fetcher.has_any_api_key():
                print("Set ETHERSCAN_API_KEY or COVALENT_API_KEY")
            transfers = await fetcher.fetch_token_transfers("0xabc...")
    """

    def __init__(
        self,
        config: Optional[TransferFetchConfig] = None,
        transport: Optional[HttpTransport] = None,
        etherscan: Optional[BaseTransferProvider] = None,
        covalent: Optional[BaseTransferProvider] = None,
    ) -> None:
        self._config = config or get_default_config()
        self._transport = transport or HttpTransport()
        self._owns_transport = transport is None

        self._etherscan = etherscan or EtherscanProvider(
            api_key=self._config.etherscan_api_key,
            transport=self._transport,
        )
        self._covalent = covalent or CovalentProvider(
            api_key=self._config.covalent_api_key,
            transport=self._transport,
        )

    def has_any_api_key(self) -> bool:
        """True iff at least one provider credential is configured."""
        return self._config.has_any_api_key

    async def fetch_token_transfers(
        self,
        address: str,
        options: Optional[FetchOptions] = None,
    ) -> list[TokenTransfer]:
        """
        Fetch one page of token transfers for an address.

        Args:
            address: Wallet address to query
            options: Chain, page and sort parameters

        Returns:
            Normalized transfers in provider order ([] when unkeyed)

        Raises:
            TransferAdapterError: When the last provider attempted fails
        """
        if self._config.has_etherscan_key:
            try:
                return await self._etherscan.fetch_transfers(address, options)
            except Exception as e:
                if not self._config.has_covalent_key:
                    raise
                logger.warning(
                    f"[{self._etherscan.name}] Fetch failed for {address}, "
                    f"falling back to {self._covalent.name}: {e}"
                )
            return await self._covalent.fetch_transfers(address, options)

        if self._config.has_covalent_key:
            return await self._covalent.fetch_transfers(address, options)

        logger.debug(f"No provider credentials configured, skipping {address}")
        return []

    async def close(self) -> None:
        """Close resources."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "TransferFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


async def fetch_token_transfers(
    address: str,
    options: Optional[FetchOptions] = None,
    config: Optional[TransferFetchConfig] = None,
) -> list[TokenTransfer]:
    """Fetch with a short-lived fetcher built from the process configuration."""
    async with TransferFetcher(config) as fetcher:
        return await fetcher.fetch_token_transfers(address, options)


def has_any_api_key(config: Optional[TransferFetchConfig] = None) -> bool:
    """True iff at least one provider credential is configured."""
    return (config or get_default_config()).has_any_api_key
