"""
Tests for configuration loading, credential masking and field helpers.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from transfer_adapters import (
    ConfigurationError,
    NormalizationError,
    TransferFetchConfig,
    TransportError,
    get_default_config,
    set_default_config,
)
from transfer_adapters.config import COVALENT_API_KEY_ENV, ETHERSCAN_API_KEY_ENV
from transfer_adapters.logging_utils import mask_headers, mask_params, mask_value
from transfer_adapters.models import FetchOptions, TokenTransfer, TransferSource
from transfer_adapters.schemas import (
    parse_iso_timestamp,
    parse_token_decimals,
    parse_unix_seconds,
    raw_amount,
)


# ============================================================
# TEST: CONFIG
# ============================================================

class TestTransferFetchConfig:
    """Tests for TransferFetchConfig."""

    def test_from_explicit_environ(self):
        config = TransferFetchConfig.from_env(
            {ETHERSCAN_API_KEY_ENV: "eth", COVALENT_API_KEY_ENV: "cov"}
        )

        assert config.etherscan_api_key == "eth"
        assert config.covalent_api_key == "cov"
        assert config.has_any_api_key

    def test_blank_values_count_as_absent(self):
        config = TransferFetchConfig.from_env(
            {ETHERSCAN_API_KEY_ENV: "   ", COVALENT_API_KEY_ENV: ""}
        )

        assert config.etherscan_api_key is None
        assert config.covalent_api_key is None
        assert not config.has_any_api_key

    def test_from_process_environment(self, monkeypatch):
        monkeypatch.setenv(ETHERSCAN_API_KEY_ENV, "from-env")
        monkeypatch.delenv(COVALENT_API_KEY_ENV, raising=False)

        config = TransferFetchConfig.from_env(load_env_file=False)

        assert config.etherscan_api_key == "from-env"
        assert not config.has_covalent_key

    def test_config_is_immutable(self):
        config = TransferFetchConfig(etherscan_api_key="eth")

        with pytest.raises(FrozenInstanceError):
            config.etherscan_api_key = "other"

    def test_to_dict_hides_key_values(self):
        data = TransferFetchConfig(etherscan_api_key="secret").to_dict()

        assert data == {"etherscan_configured": True, "covalent_configured": False}

    def test_default_config_read_once(self, monkeypatch):
        set_default_config(None)
        monkeypatch.setattr(
            TransferFetchConfig,
            "from_env",
            classmethod(lambda cls: cls(covalent_api_key="cov")),
        )
        try:
            first = get_default_config()
            second = get_default_config()
        finally:
            set_default_config(None)

        assert first is second
        assert first.covalent_api_key == "cov"


# ============================================================
# TEST: MASKING
# ============================================================

class TestMasking:
    """Credentials never reach logs in clear text."""

    def test_mask_value(self):
        assert mask_value("abcdefgh") == "abcd...***"
        assert mask_value("abc") == "***"

    def test_mask_params(self):
        masked = mask_params({"apikey": "supersecret", "address": "0x1"})

        assert masked == {"apikey": "supe...***", "address": "0x1"}

    def test_mask_headers(self):
        masked = mask_headers({"Authorization": "Bearer secret", "Accept": "json"})

        assert masked["Authorization"] == "Bear...***"
        assert masked["Accept"] == "json"


# ============================================================
# TEST: FIELD HELPERS AND MODELS
# ============================================================

class TestFieldHelpers:
    """Tests for raw field parsing."""

    def test_unix_seconds(self):
        assert parse_unix_seconds("0") == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert parse_unix_seconds(1700000000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert parse_unix_seconds("not-a-number") is None
        assert parse_unix_seconds(None) is None

    def test_iso_timestamp(self):
        expected = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

        assert parse_iso_timestamp("2023-11-14T22:13:20Z") == expected
        assert parse_iso_timestamp("2023-11-14T23:13:20+01:00") == expected
        assert parse_iso_timestamp("2023-11-14T22:13:20") == expected
        assert parse_iso_timestamp("yesterday") is None
        assert parse_iso_timestamp(12345) is None

    def test_token_decimals(self):
        assert parse_token_decimals("6") == 6
        assert parse_token_decimals(0) == 0
        assert parse_token_decimals(None) is None
        assert parse_token_decimals("") is None
        assert parse_token_decimals("-1") is None
        assert parse_token_decimals(True) is None

    def test_raw_amount_never_parsed(self):
        assert raw_amount("000123") == "000123"
        assert raw_amount(" 100 ") == " 100 "
        assert raw_amount(None) == "0"
        assert raw_amount("") == "0"
        assert raw_amount(10 ** 30) == "1" + "0" * 30


class TestModels:
    """Tests for TokenTransfer and FetchOptions."""

    def test_token_transfer_dict_round_trip(self):
        transfer = TokenTransfer(
            source=TransferSource.ETHERSCAN,
            transaction_hash="0xAA",
            timestamp=datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
            from_address="0x1",
            to_address="0x2",
            token_symbol="USDT",
            raw_value="1000000",
            token_decimals=6,
        )

        data = transfer.to_dict()

        assert data["source"] == "etherscan"
        assert data["timestamp"] == "2023-11-14T22:13:20+00:00"
        assert TokenTransfer.from_dict(data) == transfer

    @pytest.mark.parametrize("kwargs", [
        {"chain_id": 0},
        {"page": 0},
        {"page_size": -5},
    ])
    def test_fetch_options_validation(self, kwargs):
        with pytest.raises(ValueError):
            FetchOptions(**kwargs).validate()


# ============================================================
# TEST: EXCEPTIONS
# ============================================================

class TestExceptionSerialization:
    """Tests for exception to_dict and __str__."""

    def test_transport_error_to_dict(self):
        cause = ConnectionResetError("reset")
        error = TransportError(
            "HTTP 502: bad gateway",
            adapter_name="covalent",
            status_code=502,
            response_body="bad gateway",
            request_url="https://example.test",
            original_error=cause,
        )

        data = error.to_dict()

        assert data["error_type"] == "TransportError"
        assert data["adapter_name"] == "covalent"
        assert data["status_code"] == 502
        assert data["response_body"] == "bad gateway"
        assert data["request_url"] == "https://example.test"
        assert data["original_error"] == "reset"
        assert str(error) == "HTTP 502: bad gateway [adapter=covalent] (caused by: reset)"

    def test_configuration_error_names_key(self):
        error = ConfigurationError("Missing COVALENT_API_KEY", config_key=COVALENT_API_KEY_ENV)

        assert error.to_dict()["config_key"] == "COVALENT_API_KEY"
        assert error.to_dict()["original_error"] is None

    def test_normalization_error_truncates_raw_data(self):
        error = NormalizationError("bad row", raw_data="x" * 1000)

        assert len(error.to_dict()["raw_data"]) == 500
        assert NormalizationError("bad row").to_dict()["raw_data"] is None
