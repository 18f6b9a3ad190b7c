"""
Etherscan Transfer Provider - ERC-20 transfer list by address.

Uses the Etherscan API V2 unified multichain endpoint
(account/tokentx). The credential travels as the apikey query parameter.

The response envelope is not consistent across chains and endpoint
versions; see transfer_adapters.schemas.parse_etherscan_response for the
shapes that are accepted.
"""

import logging
from typing import Any, Optional

from transfer_adapters.base import BaseTransferProvider
from transfer_adapters.config import ETHERSCAN_API_KEY_ENV
from transfer_adapters.exceptions import ProviderError
from transfer_adapters.logging_utils import mask_params
from transfer_adapters.models import FetchOptions, TokenTransfer, TransferSource
from transfer_adapters.schemas import (
    EtherscanNoTransactions,
    EtherscanTokenTx,
    EtherscanTransferList,
    parse_etherscan_response,
    parse_unix_seconds,
)
from transfer_adapters.transport import HttpTransport


logger = logging.getLogger(__name__)


class EtherscanProvider(BaseTransferProvider):
    """
    Etherscan V2 token transfer provider.

    As of August 2025, V1 endpoints are deprecated; the V2 endpoint takes a
    chainid parameter instead of a per-chain host.
    """

    V2_API_URL = "https://api.etherscan.io/v2/api"

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        api_url: str = V2_API_URL,
    ) -> None:
        super().__init__(api_key, transport)
        self._api_url = api_url

    @property
    def source(self) -> TransferSource:
        return TransferSource.ETHERSCAN

    @property
    def credential_key(self) -> str:
        return ETHERSCAN_API_KEY_ENV

    def _build_params(self, address: str, options: FetchOptions) -> dict[str, str]:
        return {
            "chainid": str(options.chain_id),
            "module": "account",
            "action": "tokentx",
            "address": address,
            "page": str(options.page),
            "offset": str(options.page_size),
            "sort": options.sort.value,
            "apikey": self._require_api_key(),
        }

    async def fetch_raw(
        self,
        address: str,
        options: FetchOptions,
    ) -> Any:
        """Fetch the tokentx envelope from Etherscan API V2."""
        params = self._build_params(address, options)
        logger.debug(f"[{self.name}] GET {self._api_url} {mask_params(params)}")

        return await self._transport.request_json(
            self._api_url,
            params=params,
            adapter_name=self.name,
        )

    def normalize(self, raw_data: Any) -> list[TokenTransfer]:
        """Normalize an Etherscan envelope to TokenTransfer records."""
        parsed = parse_etherscan_response(raw_data)

        if isinstance(parsed, EtherscanTransferList):
            return [self.to_transfer(tx) for tx in parsed.transactions]

        if isinstance(parsed, EtherscanNoTransactions):
            logger.debug(f"[{self.name}] {parsed.message}")
            return []

        # EtherscanErrorResponse
        raise ProviderError(
            message=f"Etherscan error (V2): {parsed.message or 'ERROR'}: {parsed.detail}",
            adapter_name=self.name,
            provider_message=parsed.message,
            payload_detail=parsed.detail,
        )

    def to_transfer(self, tx: EtherscanTokenTx) -> TokenTransfer:
        """Map one tokentx row to the canonical record."""
        return TokenTransfer(
            source=self.source,
            transaction_hash=tx.hash,
            timestamp=self._resolve_timestamp(
                parse_unix_seconds(tx.time_stamp), tx.time_stamp
            ),
            from_address=tx.from_address,
            to_address=tx.to_address,
            token_symbol=tx.token_symbol,
            token_name=tx.token_name,
            contract_address=tx.contract_address,
            raw_value=tx.value,
            token_decimals=self._resolve_decimals(tx.token_decimal),
        )
