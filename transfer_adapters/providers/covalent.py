"""
Covalent Transfer Provider - Token transfer history by address.

Uses the transfers_v2 endpoint. The credential travels as a bearer
Authorization header.

A single transaction item can carry several token movements, so each
nested transfer event becomes its own record sharing the parent
transaction's hash and block time.

Note: delta is kept exactly as sent. Whether it is always expressed in
minimal units consistent with contract_decimals is not confirmed, so no
re-scaling is applied here.
"""

import json
import logging
from typing import Any, Optional

from transfer_adapters.base import BaseTransferProvider
from transfer_adapters.config import COVALENT_API_KEY_ENV
from transfer_adapters.exceptions import ProviderError
from transfer_adapters.logging_utils import mask_headers
from transfer_adapters.models import FetchOptions, TokenTransfer, TransferSource
from transfer_adapters.schemas import (
    CovalentTransaction,
    CovalentTransferEvent,
    parse_covalent_items,
    parse_iso_timestamp,
)
from transfer_adapters.transport import HttpTransport


logger = logging.getLogger(__name__)


class CovalentProvider(BaseTransferProvider):
    """Covalent transfers_v2 provider."""

    BASE_URL = "https://api.covalenthq.com/v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        base_url: str = BASE_URL,
    ) -> None:
        super().__init__(api_key, transport)
        self._base_url = base_url.rstrip("/")

    @property
    def source(self) -> TransferSource:
        return TransferSource.COVALENT

    @property
    def credential_key(self) -> str:
        return COVALENT_API_KEY_ENV

    def _build_url(self, address: str, options: FetchOptions) -> str:
        return f"{self._base_url}/{options.chain_id}/address/{address}/transfers_v2/"

    async def fetch_raw(
        self,
        address: str,
        options: FetchOptions,
    ) -> Any:
        """Fetch one page of transfer items from Covalent."""
        url = self._build_url(address, options)
        params = {"page-size": str(options.page_size)}
        headers = {"Authorization": f"Bearer {self._require_api_key()}"}
        logger.debug(f"[{self.name}] GET {url} {params} {mask_headers(headers)}")

        return await self._transport.request_json(
            url,
            params=params,
            headers=headers,
            adapter_name=self.name,
        )

    def normalize(self, raw_data: Any) -> list[TokenTransfer]:
        """Flatten data.items[].transfers[] into TokenTransfer records."""
        if isinstance(raw_data, dict) and raw_data.get("error"):
            message = str(raw_data.get("error_message") or "ERROR")
            raise ProviderError(
                message=f"Covalent error: {message}",
                adapter_name=self.name,
                provider_message=message,
                payload_detail=json.dumps(raw_data, default=str),
            )

        transfers: list[TokenTransfer] = []
        for item in parse_covalent_items(raw_data):
            for event in item.transfers:
                transfers.append(self.to_transfer(item, event))
        return transfers

    def to_transfer(
        self,
        item: CovalentTransaction,
        event: CovalentTransferEvent,
    ) -> TokenTransfer:
        """Map one nested transfer event, inheriting the parent's hash and time."""
        return TokenTransfer(
            source=self.source,
            transaction_hash=item.tx_hash,
            timestamp=self._resolve_timestamp(
                parse_iso_timestamp(item.block_signed_at), item.block_signed_at
            ),
            from_address=event.from_address,
            to_address=event.to_address,
            token_symbol=event.contract_ticker_symbol,
            token_name=event.contract_name,
            contract_address=event.contract_address,
            raw_value=event.delta,
            token_decimals=self._resolve_decimals(event.contract_decimals),
        )
