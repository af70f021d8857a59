"""Integer arithmetic utilities for unit and value amounts.

All amounts are int base units (18 decimals, wei-style). No float, no Decimal.
Python ints never overflow, so products like rate * balance stay exact.
"""

from src.dl_common.errors import InvalidAmountError

DECIMALS = 18
ONE = 10**DECIMALS
BPS_DENOMINATOR = 10000


def validate_positive(amount: int, message: str = "Amount must be greater than 0") -> None:
    """Raise InvalidAmountError unless amount is a positive int."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(message)


def to_base_units(whole: int) -> int:
    """Convert a whole-token amount to base units: 3 -> 3 * 10**18."""
    return whole * ONE


def amount_to_display(amount: int) -> str:
    """Render base units as a decimal string: 1500000000000000000 -> '1.5'."""
    if amount < 0:
        return "-" + amount_to_display(-amount)
    whole, frac = divmod(amount, ONE)
    if frac == 0:
        return f"{whole:,}.0"
    frac_str = f"{frac:0{DECIMALS}d}".rstrip("0")
    return f"{whole:,}.{frac_str}"


def apply_bps(amount: int, rate_bps: int) -> int:
    """Floor of amount * rate_bps / 10000."""
    if amount == 0 or rate_bps == 0:
        return 0
    return amount * rate_bps // BPS_DENOMINATOR
