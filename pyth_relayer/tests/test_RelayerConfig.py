"""Unit tests for RelayerConfig."""

import dataclasses

import pytest

from pyth_relayer.src.errors import ConfigError
from pyth_relayer.src.RelayerConfig import (
    DEFAULT_HERMES_URL,
    DEFAULT_ORACLE_ADDRESS,
    DEFAULT_PRICE_IDS,
    DEFAULT_RPC_URL,
    ETH_USD_PRICE_ID,
    RelayerConfig,
    parse_price_ids,
)

PRIVATE_KEY = "0x" + "11" * 32


class TestFromEnv:
    """Test environment resolution."""

    def test_defaults(self) -> None:
        """An empty environment should yield the built-in defaults."""
        config = RelayerConfig.from_env({})
        assert config.private_key is None
        assert config.oracle_address == DEFAULT_ORACLE_ADDRESS
        assert config.rpc_url == DEFAULT_RPC_URL
        assert config.hermes_url == DEFAULT_HERMES_URL
        assert config.price_ids == DEFAULT_PRICE_IDS
        assert config.update_interval == 45.0
        assert config.min_delay == 0.5
        assert config.error_backoff == 10.0

    def test_overrides(self) -> None:
        """Environment variables should override defaults."""
        config = RelayerConfig.from_env(
            {
                "PRIVATE_KEY_TEST": PRIVATE_KEY,
                "ORACLE_ADDRESS": "0x" + "ab" * 20,
                "RPC_URL": "http://localhost:8545",
                "HERMES_URL": "https://hermes.example/",
                "PRICE_IDS": ETH_USD_PRICE_ID,
                "UPDATE_INTERVAL": "30",
                "HTTP_TIMEOUT": "2.5",
            }
        )
        assert config.private_key == PRIVATE_KEY
        assert config.oracle_address.lower() == "0x" + "ab" * 20
        assert config.rpc_url == "http://localhost:8545"
        assert config.hermes_url == "https://hermes.example"
        assert config.price_ids == (ETH_USD_PRICE_ID,)
        assert config.update_interval == 30.0
        assert config.http_timeout == 2.5

    def test_empty_key_is_missing(self) -> None:
        """An empty key variable should count as unset."""
        config = RelayerConfig.from_env({"PRIVATE_KEY_TEST": ""})
        assert config.private_key is None

    def test_invalid_address(self) -> None:
        """Malformed oracle address should raise ConfigError."""
        with pytest.raises(ConfigError, match="ORACLE_ADDRESS"):
            RelayerConfig.from_env({"ORACLE_ADDRESS": "0x1234"})

    def test_invalid_number(self) -> None:
        """Non-numeric interval should raise ConfigError."""
        with pytest.raises(ConfigError, match="UPDATE_INTERVAL must be a number"):
            RelayerConfig.from_env({"UPDATE_INTERVAL": "soon"})

    def test_non_positive_number(self) -> None:
        """Zero timeout should raise ConfigError."""
        with pytest.raises(ConfigError, match="HTTP_TIMEOUT must be positive"):
            RelayerConfig.from_env({"HTTP_TIMEOUT": "0"})

    def test_frozen(self) -> None:
        """Configuration should be immutable."""
        config = RelayerConfig.from_env({})
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.rpc_url = "http://elsewhere"  # type: ignore[misc]


class TestPrivateKey:
    """Test signing key handling."""

    def test_require_private_key(self) -> None:
        """Configured key should be returned."""
        config = RelayerConfig(private_key=PRIVATE_KEY)
        assert config.require_private_key() == PRIVATE_KEY

    def test_missing_private_key(self) -> None:
        """Missing key should raise a descriptive ConfigError."""
        with pytest.raises(ConfigError, match="PRIVATE_KEY_TEST environment variable is not set"):
            RelayerConfig().require_private_key()

    def test_malformed_private_key(self) -> None:
        """A key that is not 32 bytes of hex should be rejected without echoing it."""
        for bad_key in ("not-a-key", "0x1234", "0x" + "zz" * 32):
            with pytest.raises(ConfigError, match="not a valid private key") as exc_info:
                RelayerConfig(private_key=bad_key).require_private_key()
            assert bad_key not in str(exc_info.value)

    def test_unprefixed_private_key(self) -> None:
        """Keys without the 0x prefix are accepted."""
        config = RelayerConfig(private_key="11" * 32)
        assert config.require_private_key() == "11" * 32

    def test_key_not_in_repr(self) -> None:
        """The key must never appear in the repr."""
        config = RelayerConfig(private_key=PRIVATE_KEY)
        assert PRIVATE_KEY not in repr(config)


class TestParsePriceIds:
    """Test feed identifier parsing."""

    def test_comma_separated(self) -> None:
        """Multiple ids should be split and trimmed."""
        ids = parse_price_ids(" " + ",".join(DEFAULT_PRICE_IDS) + " ,")
        assert ids == DEFAULT_PRICE_IDS

    def test_adds_prefix_and_lowercases(self) -> None:
        """Bare uppercase hex should be normalized."""
        ids = parse_price_ids("AB" * 32)
        assert ids == ("0x" + "ab" * 32,)

    def test_wrong_length(self) -> None:
        """Ids must be 32 bytes."""
        with pytest.raises(ConfigError, match="Invalid price feed id"):
            parse_price_ids("0x1234")

    def test_empty(self) -> None:
        """An empty list should raise ConfigError."""
        with pytest.raises(ConfigError, match="At least one"):
            parse_price_ids(" , ")


class TestExplorerUrl:
    def test_explorer_tx_url(self) -> None:
        """Explorer URL should point at the transaction page."""
        config = RelayerConfig(explorer_url="https://sepolia.arbiscan.io")
        assert config.explorer_tx_url("0xabc") == "https://sepolia.arbiscan.io/tx/0xabc"
