"""
Tests for the TransferFetcher provider selection and fallback.

============================================================
TEST SCENARIOS
============================================================
1. No credentials → [] and no network call
2. Covalent only → Covalent exclusively
3. Etherscan keyed and healthy → Etherscan only
4. Etherscan fails + Covalent keyed → Covalent outcome
5. Etherscan fails, no Covalent → original error re-raised

============================================================
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from transfer_adapters import (
    CovalentProvider,
    EtherscanProvider,
    FetchOptions,
    HttpTransport,
    ProviderError,
    TransferFetchConfig,
    TransferFetcher,
    TransferSource,
    TransportError,
    fetch_token_transfers,
    has_any_api_key,
)


# ============================================================
# FIXTURES
# ============================================================

ETHERSCAN_OK = {
    "status": "1",
    "message": "OK",
    "result": [
        {
            "hash": "0xAA",
            "timeStamp": "1700000000",
            "from": "0x1",
            "to": "0x2",
            "tokenSymbol": "USDT",
            "value": "1000000",
            "tokenDecimal": "6",
        }
    ],
}

ETHERSCAN_NOTOK = {"status": "0", "message": "NOTOK", "result": "Invalid API Key"}

COVALENT_OK = {
    "data": {
        "items": [
            {
                "tx_hash": "0xCC",
                "block_signed_at": "2023-11-14T22:13:20Z",
                "transfers": [
                    {
                        "from_address": "0x3",
                        "to_address": "0x4",
                        "contract_ticker_symbol": "DAI",
                        "delta": "5",
                        "contract_decimals": 18,
                    }
                ],
            }
        ]
    }
}


def make_transport(*responses):
    """Transport stub returning (or raising) each response in turn."""
    transport = MagicMock(spec=HttpTransport)
    transport.request_json = AsyncMock(side_effect=list(responses))
    transport.close = AsyncMock()
    return transport


def mock_provider(name, result=None, error=None):
    provider = MagicMock()
    provider.name = name
    if error is not None:
        provider.fetch_transfers = AsyncMock(side_effect=error)
    else:
        provider.fetch_transfers = AsyncMock(return_value=result or [])
    return provider


BOTH_KEYS = TransferFetchConfig(etherscan_api_key="eth", covalent_api_key="cov")
ETHERSCAN_ONLY = TransferFetchConfig(etherscan_api_key="eth")
COVALENT_ONLY = TransferFetchConfig(covalent_api_key="cov")
NO_KEYS = TransferFetchConfig()


# ============================================================
# TEST: SELECTION POLICY
# ============================================================

class TestSelectionPolicy:
    """Tests for which provider is called."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("address", ["0xabc", "0xDEF", ""])
    async def test_no_credentials_returns_empty_without_network(self, address):
        transport = make_transport()
        fetcher = TransferFetcher(NO_KEYS, transport=transport)

        result = await fetcher.fetch_token_transfers(address)

        assert result == []
        assert transport.request_json.await_count == 0

    @pytest.mark.asyncio
    async def test_covalent_only_routes_to_covalent(self):
        transport = make_transport(COVALENT_OK)
        fetcher = TransferFetcher(COVALENT_ONLY, transport=transport)

        result = await fetcher.fetch_token_transfers("0xabc")

        assert [t.source for t in result] == [TransferSource.COVALENT]
        assert transport.request_json.await_count == 1
        url = transport.request_json.call_args.args[0]
        assert url.startswith(CovalentProvider.BASE_URL)

    @pytest.mark.asyncio
    async def test_etherscan_success_skips_covalent(self):
        etherscan = mock_provider("etherscan", result=["eth-record"])
        covalent = mock_provider("covalent", result=["cov-record"])
        fetcher = TransferFetcher(BOTH_KEYS, etherscan=etherscan, covalent=covalent)

        result = await fetcher.fetch_token_transfers("0xabc")

        assert result == ["eth-record"]
        covalent.fetch_transfers.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_options_passed_through(self):
        etherscan = mock_provider("etherscan")
        fetcher = TransferFetcher(ETHERSCAN_ONLY, etherscan=etherscan, covalent=mock_provider("covalent"))
        options = FetchOptions(chain_id=10, page_size=5)

        await fetcher.fetch_token_transfers("0xabc", options)

        etherscan.fetch_transfers.assert_awaited_once_with("0xabc", options)


# ============================================================
# TEST: FALLBACK
# ============================================================

class TestFallback:
    """Tests for Etherscan → Covalent fallback."""

    @pytest.mark.asyncio
    async def test_fallback_equals_direct_covalent_call(self):
        transport = make_transport(ETHERSCAN_NOTOK, COVALENT_OK)
        fetcher = TransferFetcher(BOTH_KEYS, transport=transport)

        result = await fetcher.fetch_token_transfers("0xabc")

        direct = CovalentProvider(api_key="cov", transport=make_transport(COVALENT_OK))
        expected = await direct.fetch_transfers("0xabc")

        assert result == expected
        assert transport.request_json.await_count == 2

    @pytest.mark.asyncio
    async def test_transport_error_triggers_fallback(self):
        error = TransportError("HTTP 500: oops", status_code=500, response_body="oops")
        transport = make_transport(error, COVALENT_OK)
        fetcher = TransferFetcher(BOTH_KEYS, transport=transport)

        result = await fetcher.fetch_token_transfers("0xabc")

        assert [t.transaction_hash for t in result] == ["0xCC"]

    @pytest.mark.asyncio
    async def test_covalent_failure_is_final_outcome(self):
        eth_error = ProviderError("etherscan down")
        cov_error = TransportError("HTTP 401: unauthorized", status_code=401)
        fetcher = TransferFetcher(
            BOTH_KEYS,
            etherscan=mock_provider("etherscan", error=eth_error),
            covalent=mock_provider("covalent", error=cov_error),
        )

        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch_token_transfers("0xabc")

        assert exc_info.value is cov_error

    @pytest.mark.asyncio
    async def test_no_covalent_reraises_original_error(self):
        eth_error = ProviderError("Etherscan error (V2): NOTOK: Invalid API Key")
        covalent = mock_provider("covalent")
        fetcher = TransferFetcher(
            ETHERSCAN_ONLY,
            etherscan=mock_provider("etherscan", error=eth_error),
            covalent=covalent,
        )

        with pytest.raises(ProviderError) as exc_info:
            await fetcher.fetch_token_transfers("0xabc")

        assert exc_info.value is eth_error
        covalent.fetch_transfers.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_error_also_falls_back(self):
        covalent = mock_provider("covalent", result=["cov-record"])
        fetcher = TransferFetcher(
            BOTH_KEYS,
            etherscan=mock_provider("etherscan", error=RuntimeError("boom")),
            covalent=covalent,
        )

        assert await fetcher.fetch_token_transfers("0xabc") == ["cov-record"]


# ============================================================
# TEST: PREDICATE AND MODULE FUNCTIONS
# ============================================================

class TestApiKeyPredicate:
    """Tests for has_any_api_key."""

    @pytest.mark.parametrize("config,expected", [
        (NO_KEYS, False),
        (ETHERSCAN_ONLY, True),
        (COVALENT_ONLY, True),
        (BOTH_KEYS, True),
        (TransferFetchConfig(etherscan_api_key="  ", covalent_api_key=""), False),
    ])
    def test_predicate(self, config, expected):
        assert TransferFetcher(config, transport=make_transport()).has_any_api_key() is expected
        assert has_any_api_key(config) is expected

    @pytest.mark.asyncio
    async def test_module_fetch_without_keys(self):
        assert await fetch_token_transfers("0xabc", config=NO_KEYS) == []

    @pytest.mark.asyncio
    async def test_context_manager_keeps_injected_transport_open(self):
        transport = make_transport()

        async with TransferFetcher(NO_KEYS, transport=transport):
            pass

        transport.close.assert_not_awaited()
