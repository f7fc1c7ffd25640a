"""RelayerConfig: Immutable relayer configuration resolved from the environment.

Built once at process start and passed to every operation.

.. code-block:: python

    >>> config = RelayerConfig.from_env({"PRIVATE_KEY_TEST": "0x01"})
    >>> config.update_interval
    45.0
    >>> len(config.price_ids)
    2
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from web3 import Web3

from .errors import ConfigError

DEFAULT_ORACLE_ADDRESS = Web3.to_checksum_address(
    "0xdefe2f4d1bf069c7167f9b093f2ee9f01d557812"
)
DEFAULT_RPC_URL = "https://sepolia-rollup.arbitrum.io/rpc"
DEFAULT_HERMES_URL = "https://hermes.pyth.network"
DEFAULT_EXPLORER_URL = "https://sepolia.arbiscan.io"

ETH_USD_PRICE_ID = "0xff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace"
USDC_USD_PRICE_ID = "0xeaa020c61cc479712813461ce153894a96a6c00b21ed0cfc2798d1f9a9e9c94a"
DEFAULT_PRICE_IDS = (ETH_USD_PRICE_ID, USDC_USD_PRICE_ID)

PRIVATE_KEY_ENV = "PRIVATE_KEY_TEST"

_PRICE_ID_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _parse_address(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name) or default
    if not Web3.is_address(raw.lower()):
        raise ConfigError(f"{name} is not a valid address: {raw!r}")
    return Web3.to_checksum_address(raw)


def parse_price_ids(value: str) -> tuple[str, ...]:
    """Parse a comma-separated list of feed identifiers.

    Identifiers without a ``0x`` prefix are accepted and normalized.

    :param value: Comma-separated identifiers.
    :returns: Tuple of ``0x``-prefixed lowercase identifiers.
    :raises ConfigError: If the list is empty or an identifier is malformed.
    """
    ids = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if not item.startswith("0x"):
            item = "0x" + item
        if not _PRICE_ID_RE.match(item):
            raise ConfigError(f"Invalid price feed id: {item!r}")
        ids.append(item.lower())
    if not ids:
        raise ConfigError("At least one price feed id must be specified")
    return tuple(ids)


@dataclass(frozen=True)
class RelayerConfig:
    """Relayer configuration.

    :ivar private_key: Signing key for update transactions, None for read-only use.
    :ivar oracle_address: Checksummed address of the oracle contract.
    :ivar rpc_url: Chain RPC endpoint.
    :ivar hermes_url: Base URL of the price attestation service.
    :ivar price_ids: Feed identifiers to update.
    :ivar explorer_url: Block explorer base URL used in log messages.
    :ivar update_interval: Target seconds between cycle starts.
    :ivar min_delay: Minimum seconds to wait between cycles.
    :ivar error_backoff: Seconds to wait after a failed cycle.
    :ivar http_timeout: Attestation service request timeout in seconds.
    :ivar rpc_timeout: RPC request timeout in seconds.
    :ivar receipt_timeout: Seconds to wait for a transaction receipt.
    """

    private_key: str | None = field(default=None, repr=False)
    oracle_address: str = DEFAULT_ORACLE_ADDRESS
    rpc_url: str = DEFAULT_RPC_URL
    hermes_url: str = DEFAULT_HERMES_URL
    price_ids: tuple[str, ...] = DEFAULT_PRICE_IDS
    explorer_url: str = DEFAULT_EXPLORER_URL
    update_interval: float = 45.0
    min_delay: float = 0.5
    error_backoff: float = 10.0
    http_timeout: float = 10.0
    rpc_timeout: float = 30.0
    receipt_timeout: float = 120.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> RelayerConfig:
        """Build the configuration from environment variables.

        :param env: Mapping to read from (default: ``os.environ``).
        :returns: New RelayerConfig instance.
        :raises ConfigError: If a variable holds an invalid value.
        """
        if env is None:
            env = os.environ

        price_ids = DEFAULT_PRICE_IDS
        if env.get("PRICE_IDS"):
            price_ids = parse_price_ids(env["PRICE_IDS"])

        return cls(
            private_key=env.get(PRIVATE_KEY_ENV) or None,
            oracle_address=_parse_address(env, "ORACLE_ADDRESS", DEFAULT_ORACLE_ADDRESS),
            rpc_url=env.get("RPC_URL") or DEFAULT_RPC_URL,
            hermes_url=(env.get("HERMES_URL") or DEFAULT_HERMES_URL).rstrip("/"),
            price_ids=price_ids,
            explorer_url=(env.get("EXPLORER_URL") or DEFAULT_EXPLORER_URL).rstrip("/"),
            update_interval=_parse_float(env, "UPDATE_INTERVAL", 45.0),
            http_timeout=_parse_float(env, "HTTP_TIMEOUT", 10.0),
            receipt_timeout=_parse_float(env, "RECEIPT_TIMEOUT", 120.0),
        )

    def require_private_key(self) -> str:
        """Return the signing key.

        :returns: The private key.
        :raises ConfigError: If no key is configured or it is malformed.
        """
        if not self.private_key:
            raise ConfigError(
                f"{PRIVATE_KEY_ENV} environment variable is not set. "
                "Please set it in the environment or the function configuration."
            )
        if not _PRIVATE_KEY_RE.match(self.private_key):
            raise ConfigError(
                f"{PRIVATE_KEY_ENV} is not a valid private key "
                "(expected 32 bytes of hex)"
            )
        return self.private_key

    def explorer_tx_url(self, tx_hash: str) -> str:
        """Return the block explorer URL for a transaction hash."""
        return f"{self.explorer_url}/tx/{tx_hash}"
