"""PriceReader: Read-only price queries against the oracle contract."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from .errors import RelayerError
from .OperationResult import PriceResult
from .OracleContract import OracleContract

if TYPE_CHECKING:
    from .RelayerConfig import RelayerConfig

logger = logging.getLogger(__name__)


def _read_only_contract(config: RelayerConfig) -> OracleContract:
    return OracleContract.from_config(config, with_signer=False)


class PriceReader:
    """Queries stored prices. Never sends transactions.

    :ivar config: Relayer configuration.
    :ivar chain_factory: Builds an OracleContract for each query.
    """

    def __init__(
        self,
        config: RelayerConfig,
        chain_factory: Callable[[RelayerConfig], OracleContract] | None = None,
    ) -> None:
        self.config = config
        self.chain_factory = chain_factory or _read_only_contract

    def _query(
        self, label: str, address: str, read: Callable[[OracleContract], int]
    ) -> PriceResult:
        logger.info(f"Getting price for {label}: {address}")
        try:
            raw = read(self.chain_factory(self.config))
        except RelayerError as e:
            logger.error(f"Error getting {label} price: {e}")
            return PriceResult.failed(str(e))

        result = PriceResult.ok(raw)
        logger.info(f"Retrieved price: {result.price} (18 decimals)")
        return result

    def get_underlying_price(self, ctoken_address: str) -> PriceResult:
        """Read the price of a derived asset via ``getUnderlyingPrice``.

        :param ctoken_address: cToken address.
        :returns: PriceResult with decimal and raw price.
        """
        return self._query(
            "cToken",
            ctoken_address,
            lambda chain: chain.get_underlying_price(ctoken_address),
        )

    def get_asset_price(self, asset_address: str) -> PriceResult:
        """Read the price of an asset via ``assetPrices``.

        :param asset_address: Asset address.
        :returns: PriceResult with decimal and raw price.
        """
        return self._query(
            "asset", asset_address, lambda chain: chain.get_asset_price(asset_address)
        )
