"""
Transfer Adapters Package - Multi-provider ERC-20 transfer history.

Fetches a wallet's token transfers from Etherscan (V2) or Covalent and
normalizes both response schemas into one TokenTransfer record.

Quick Start:
    from transfer_adapters import (
        FetchOptions,
        TransferFetchConfig,
        TransferFetcher,
    )

    async def show_transfers(address: str):
        config = TransferFetchConfig.from_env()

        async with TransferFetcher(config) as fetcher:
            transfers = await fetcher.fetch_token_transfers(
                address,
                FetchOptions(chain_id=1, page_size=50),
            )

        for t in transfers:
            print(t.timestamp, t.token_symbol, t.raw_value, t.token_decimals)

Provider selection:
- ETHERSCAN_API_KEY set: Etherscan first, Covalent as fallback
- only COVALENT_API_KEY set: Covalent
- neither: empty list, no network call

Errors (all TransferAdapterError):
- ConfigurationError: credential missing, raised before any request
- TransportError: non-2xx status or network failure
- ProviderError: provider reported a data-level problem
"""

from transfer_adapters.base import BaseTransferProvider
from transfer_adapters.config import (
    TransferFetchConfig,
    get_default_config,
    set_default_config,
)
from transfer_adapters.exceptions import (
    ConfigurationError,
    NormalizationError,
    ProviderError,
    TransferAdapterError,
    TransportError,
)
from transfer_adapters.fetcher import (
    TransferFetcher,
    fetch_token_transfers,
    has_any_api_key,
)
from transfer_adapters.models import (
    DEFAULT_TOKEN_DECIMALS,
    FetchOptions,
    SortOrder,
    TokenTransfer,
    TransferSource,
)
from transfer_adapters.providers import CovalentProvider, EtherscanProvider
from transfer_adapters.transport import HttpTransport


__version__ = "1.0.0"

__all__ = [
    # Base
    "BaseTransferProvider",

    # Models
    "TokenTransfer",
    "TransferSource",
    "FetchOptions",
    "SortOrder",
    "DEFAULT_TOKEN_DECIMALS",

    # Config
    "TransferFetchConfig",
    "get_default_config",
    "set_default_config",

    # Exceptions
    "TransferAdapterError",
    "ConfigurationError",
    "TransportError",
    "ProviderError",
    "NormalizationError",

    # Transport
    "HttpTransport",

    # Providers
    "EtherscanProvider",
    "CovalentProvider",

    # Fetcher
    "TransferFetcher",
    "fetch_token_transfers",
    "has_any_api_key",
]
