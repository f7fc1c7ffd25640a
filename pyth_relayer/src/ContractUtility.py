"""ContractUtility: Web3 initialization and contract ABI loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder

from .errors import ConfigError
from .RelayerConfig import PRIVATE_KEY_ENV

if TYPE_CHECKING:
    from .RelayerConfig import RelayerConfig


class ContractUtility:
    """Utility for Web3 connection and contract ABI loading.

    :ivar rpc_url: Chain RPC URL.
    :ivar w3: Configured Web3 instance.
    :ivar account: Local signing account, or None when read-only.
    """

    def __init__(self, config: RelayerConfig, with_signer: bool = True) -> None:
        """Initialize the contract utility.

        :param config: Relayer configuration.
        :param with_signer: Attach the configured signing key to the provider.
        :raises ConfigError: If a signer is requested but no valid key is configured.
        """
        self.rpc_url = config.rpc_url
        self.w3 = Web3(
            Web3.HTTPProvider(
                self.rpc_url, request_kwargs={"timeout": config.rpc_timeout}
            )
        )

        self.account: LocalAccount | None = None
        if with_signer:
            try:
                self.account = Account.from_key(config.require_private_key())
            except ValueError as e:
                raise ConfigError(
                    f"{PRIVATE_KEY_ENV} is not a valid private key"
                ) from e
            self.w3.middleware_onion.add(
                SignAndSendRawMiddlewareBuilder.build(self.account)
            )
            self.w3.eth.default_account = self.account.address

    @staticmethod
    def get_contract(contract_name: str) -> list:
        """Fetch the ABI of a contract from the bundled abi folder.

        :param contract_name: Name of the contract (e.g., "PythPriceOracle").
        :returns: Contract ABI.
        """
        output_path = (
            Path(__file__).parent.parent / "abi" / f"{contract_name}.json"
        ).resolve()

        with open(output_path, "r") as file:
            contract_data = json.load(file)

        return contract_data["abi"]
