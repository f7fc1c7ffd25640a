"""Fixed-point formatting for on-chain integer amounts."""

# Prices stored by the oracle use 18 decimals.
PRICE_DECIMALS = 18


def format_units(value: int, decimals: int = PRICE_DECIMALS) -> str:
    """Format an integer amount as a decimal string.

    Trailing zeros are trimmed but at least one fractional digit is kept.

    :param value: Raw integer amount.
    :param decimals: Number of decimals the amount is scaled by.
    :returns: Decimal string representation.

    .. code-block:: python

        >>> format_units(1500 * 10**18)
        '1500.0'
        >>> format_units(1)
        '0.000000000000000001'
        >>> format_units(123456789, decimals=6)
        '123.456789'
    """
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10**decimals)
    if decimals == 0:
        return f"{sign}{whole}.0"
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{frac_str}"


def format_ether(value: int) -> str:
    """Format a wei amount as ETH."""
    return format_units(value, 18)
