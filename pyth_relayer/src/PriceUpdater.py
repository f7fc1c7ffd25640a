"""PriceUpdater: One price update submission cycle.

A cycle fetches signed update data from Hermes, quotes the verifier fee and
submits ``updatePythPrices`` with that fee attached. Every cycle builds a fresh
provider and contract handle from the configuration, so a failed cycle leaves
nothing behind.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from .errors import RelayerError
from .HermesClient import HermesClient
from .OperationResult import UpdateResult
from .OracleContract import OracleContract

if TYPE_CHECKING:
    from .RelayerConfig import RelayerConfig

logger = logging.getLogger(__name__)


class PriceUpdater:
    """Runs the fetch, fee and submit steps against the configured oracle.

    :ivar config: Relayer configuration.
    :ivar hermes: Attestation service client.
    :ivar chain_factory: Builds an OracleContract for each cycle.
    """

    def __init__(
        self,
        config: RelayerConfig,
        hermes: HermesClient | None = None,
        chain_factory: Callable[[RelayerConfig], OracleContract] | None = None,
    ) -> None:
        """Initialize the updater.

        :param config: Relayer configuration.
        :param hermes: Optional Hermes client (default: built from config).
        :param chain_factory: Optional factory for contract handles
            (default: OracleContract.from_config with signer).
        """
        self.config = config
        self.hermes = hermes or HermesClient(
            config.hermes_url, timeout=config.http_timeout
        )
        self.chain_factory = chain_factory or OracleContract.from_config

    async def fetch_update_data(self) -> list[str]:
        """Fetch update blobs for all configured feeds.

        :raises FetchError: If the attestation service fails.
        """
        logger.info("Fetching price updates from Hermes...")
        return await self.hermes.fetch_price_updates(self.config.price_ids)

    async def update_prices(self) -> UpdateResult:
        """Run one full submission cycle.

        Relayer errors are logged and reported as a failed result; anything
        else propagates to the driver.

        :returns: UpdateResult with the transaction hash on success.
        """
        logger.info("Starting price update process...")
        logger.info(f"RPC URL: {self.config.rpc_url}")
        logger.info(f"Oracle Address: {self.config.oracle_address}")

        try:
            self.config.require_private_key()
            chain = self.chain_factory(self.config)
            blobs = await self.fetch_update_data()
            fee = chain.get_update_fee(blobs)
            submitted = chain.submit_price_update(blobs, fee)
        except RelayerError as e:
            logger.error(f"Error updating oracle prices: {e}")
            return UpdateResult.failed(str(e))

        logger.info(f"Explorer URL: {self.config.explorer_tx_url(submitted.tx_hash)}")
        return UpdateResult.ok(submitted.tx_hash, submitted.block_number)
