"""Uniform success/failure results returned by public operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .units import format_units


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one price update submission cycle.

    :ivar success: True if the transaction was confirmed.
    :ivar tx_hash: Transaction hash on success.
    :ivar block_number: Confirmation block on success.
    :ivar error: Error description on failure.
    """

    success: bool
    tx_hash: str | None = None
    block_number: int | None = None
    error: str | None = None

    @classmethod
    def ok(cls, tx_hash: str, block_number: int) -> UpdateResult:
        return cls(success=True, tx_hash=tx_hash, block_number=block_number)

    @classmethod
    def failed(cls, error: str) -> UpdateResult:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable form used by the CLI and handler."""
        if self.success:
            return {
                "success": True,
                "hash": self.tx_hash,
                "blockNumber": self.block_number,
            }
        return {"success": False, "error": self.error}


@dataclass(frozen=True)
class PriceResult:
    """Outcome of a price read.

    :ivar success: True if the price was read.
    :ivar raw: Raw on-chain price (scaled by 10**18) on success.
    :ivar error: Error description on failure.
    """

    success: bool
    raw: int | None = None
    error: str | None = None

    @classmethod
    def ok(cls, raw: int) -> PriceResult:
        return cls(success=True, raw=raw)

    @classmethod
    def failed(cls, error: str) -> PriceResult:
        return cls(success=False, error=error)

    @property
    def price(self) -> str | None:
        """Decimal price string, e.g. "1500.25"."""
        if self.raw is None:
            return None
        return format_units(self.raw)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable form used by the CLI and handler."""
        if self.success:
            return {"success": True, "price": self.price, "raw": str(self.raw)}
        return {"success": False, "error": self.error}
