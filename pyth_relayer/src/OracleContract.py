"""OracleContract: Calls against the price oracle and its Pyth verifier.

Web3 and transport failures are converted into relayer errors here:
    - fee quotes raise FeeQueryError
    - update transactions raise SubmissionError
    - price reads raise QueryError
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from web3 import Web3
from web3.exceptions import Web3Exception

from .ContractUtility import ContractUtility
from .errors import FeeQueryError, QueryError, SubmissionError
from .units import format_ether

if TYPE_CHECKING:
    from web3.contract import Contract

    from .RelayerConfig import RelayerConfig

logger = logging.getLogger(__name__)

# Errors raised by web3 calls and the underlying HTTP transport.
CHAIN_ERRORS = (Web3Exception, ValueError, OSError)


@dataclass(frozen=True)
class SubmittedUpdate:
    """A confirmed price update transaction.

    :ivar tx_hash: Transaction hash (0x-prefixed).
    :ivar block_number: Block in which the transaction was included.
    """

    tx_hash: str
    block_number: int


def to_update_bytes(blobs: Sequence[str]) -> list[bytes]:
    """Convert 0x-prefixed hex blobs to the ``bytes[]`` contract argument."""
    return [Web3.to_bytes(hexstr=blob) for blob in blobs]


class OracleContract:
    """Handle on the oracle contract for one operation.

    :ivar w3: Web3 instance.
    :ivar contract: Oracle contract instance.
    :ivar sender: Address used to sign update transactions, if any.
    :ivar receipt_timeout: Seconds to wait for a transaction receipt.
    """

    def __init__(
        self,
        w3: Web3,
        oracle_address: str,
        sender: str | None = None,
        receipt_timeout: float = 120.0,
    ) -> None:
        """Initialize the contract handle.

        :param w3: Web3 instance (with signing middleware for updates).
        :param oracle_address: Oracle contract address.
        :param sender: Signer address for update transactions.
        :param receipt_timeout: Seconds to wait for a receipt (default: 120).
        """
        self.w3 = w3
        self.sender = sender
        self.receipt_timeout = receipt_timeout
        self.contract: Contract = w3.eth.contract(
            address=Web3.to_checksum_address(oracle_address),
            abi=ContractUtility.get_contract("PythPriceOracle"),
        )

    @classmethod
    def from_config(
        cls, config: RelayerConfig, with_signer: bool = True
    ) -> OracleContract:
        """Build a fresh provider and contract handle from configuration.

        :param config: Relayer configuration.
        :param with_signer: Attach the signing key (needed for updates only).
        :returns: New OracleContract instance.
        :raises ConfigError: If a signer is requested but no key is configured.
        """
        utility = ContractUtility(config, with_signer=with_signer)
        return cls(
            utility.w3,
            config.oracle_address,
            sender=utility.account.address if utility.account else None,
            receipt_timeout=config.receipt_timeout,
        )

    def get_verifier_address(self) -> str:
        """Read the Pyth verifier contract address from the oracle.

        :returns: Verifier contract address.
        :raises FeeQueryError: If the call fails.
        """
        try:
            return self.contract.functions.pyth().call()
        except CHAIN_ERRORS as e:
            raise FeeQueryError(f"Failed to read verifier address: {e}") from e

    def get_update_fee(self, blobs: Sequence[str]) -> int:
        """Quote the native currency payment required to accept the blobs.

        :param blobs: 0x-prefixed update blobs.
        :returns: Fee in wei.
        :raises FeeQueryError: If either contract call fails.
        """
        verifier_address = self.get_verifier_address()
        logger.info(f"Pyth verifier address: {verifier_address}")

        try:
            verifier = self.w3.eth.contract(
                address=verifier_address,
                abi=ContractUtility.get_contract("IPyth"),
            )
            fee = verifier.functions.getUpdateFee(to_update_bytes(blobs)).call()
        except CHAIN_ERRORS as e:
            raise FeeQueryError(f"Failed to quote update fee: {e}") from e

        logger.info(f"Update fee: {fee} wei")
        return int(fee)

    def get_balance(self) -> int:
        """Return the signer balance in wei.

        :raises SubmissionError: If no signer is configured or the call fails.
        """
        if self.sender is None:
            raise SubmissionError("No signer configured for price updates")
        try:
            return int(self.w3.eth.get_balance(self.sender))
        except CHAIN_ERRORS as e:
            raise SubmissionError(f"Failed to read signer balance: {e}") from e

    def submit_price_update(self, blobs: Sequence[str], fee: int) -> SubmittedUpdate:
        """Send ``updatePythPrices`` with the fee attached and wait for inclusion.

        :param blobs: 0x-prefixed update blobs.
        :param fee: Payment in wei, as quoted by get_update_fee().
        :returns: Hash and block number of the confirmed transaction.
        :raises SubmissionError: On insufficient balance, revert or timeout.
        """
        balance = self.get_balance()
        logger.info(f"Wallet {self.sender} balance: {format_ether(balance)} ETH")
        if balance < fee:
            raise SubmissionError(
                f"Insufficient balance: {balance} wei available, {fee} wei required"
            )

        try:
            tx_params = self.contract.functions.updatePythPrices(
                to_update_bytes(blobs)
            ).build_transaction({"from": self.sender, "value": fee})
            tx_hash = Web3.to_hex(self.w3.eth.send_transaction(tx_params))
        except CHAIN_ERRORS as e:
            raise SubmissionError(f"Failed to send price update: {e}") from e

        logger.info(f"Transaction sent! Hash: {tx_hash}")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except CHAIN_ERRORS as e:
            raise SubmissionError(
                f"Transaction {tx_hash} not confirmed: {e}"
            ) from e

        if receipt["status"] != 1:
            raise SubmissionError(
                f"Transaction {tx_hash} reverted in block {receipt['blockNumber']}"
            )

        logger.info(f"Transaction confirmed in block {receipt['blockNumber']}")
        return SubmittedUpdate(tx_hash=tx_hash, block_number=receipt["blockNumber"])

    def _read_price(self, method: str, address: str) -> int:
        if not Web3.is_address(address.lower()):
            raise QueryError(f"Invalid address: {address!r}")
        try:
            fn = getattr(self.contract.functions, method)
            return int(fn(Web3.to_checksum_address(address)).call())
        except CHAIN_ERRORS as e:
            raise QueryError(f"{method}({address}) failed: {e}") from e

    def get_underlying_price(self, ctoken_address: str) -> int:
        """Read the stored price for a derived asset (cToken).

        :param ctoken_address: cToken address.
        :returns: Raw price scaled by 10**18.
        :raises QueryError: On invalid address, revert or RPC failure.
        """
        return self._read_price("getUnderlyingPrice", ctoken_address)

    def get_asset_price(self, asset_address: str) -> int:
        """Read the stored price for an underlying asset.

        :param asset_address: Asset address.
        :returns: Raw price scaled by 10**18.
        :raises QueryError: On invalid address, revert or RPC failure.
        """
        return self._read_price("assetPrices", asset_address)
