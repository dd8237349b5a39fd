"""Display helpers for balances and long identifiers."""

from __future__ import annotations

from .const import BALANCE_DISPLAY_DIVISOR, BALANCE_SCALE_DIVISOR
from .domain import Balance


def parse_ether(value: str | int) -> float:
    """Scale an 18-decimal base-unit amount to a 4-decimal display value.

    The integer division truncates toward zero before the final float
    division, so ``"1234000000000000000"`` becomes ``1.234``.
    """

    amount = int(str(value).strip())
    scaled = abs(amount) // BALANCE_SCALE_DIVISOR
    if amount < 0:
        scaled = -scaled
    return scaled / BALANCE_DISPLAY_DIVISOR


def format_balance(balance: Balance) -> str:
    """Return the balance line shown next to a node."""

    return f"{parse_ether(balance.hopr)} HOPR, {parse_ether(balance.native)} ETH"


def truncate(value: str, chars: int = 10) -> str:
    """Return ``value`` shortened to its first and last ``chars`` characters."""

    if len(value) <= chars * 2:
        return value
    return f"{value[:chars]}...{value[-chars:]}"
