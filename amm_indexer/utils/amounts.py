# amm_indexer/utils/amounts.py
"""
Utility functions for handling raw on-chain amounts and their decimal scaling
"""

from decimal import Decimal, localcontext
from typing import Union

# uint256 max has 78 digits, so scaling never rounds
SCALING_PRECISION = 80


def amount_to_int(amount: Union[str, int, None]) -> int:
    """Convert amount to int with robust type handling"""
    if amount is None:
        return 0
    if isinstance(amount, str):
        if amount.strip() == "":
            return 0
        return int(amount, 0) if amount.lower().startswith(("0x", "-0x")) else int(amount)
    return int(amount)


def scale_down(amount: Union[str, int], decimals: int) -> Decimal:
    """
    Convert a raw integer token amount to its human-scale decimal value.

    The result is exact: 1500000 with 6 decimals is Decimal('1.500000').
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    with localcontext() as ctx:
        ctx.prec = SCALING_PRECISION
        return Decimal(amount_to_int(amount)).scaleb(-decimals)


def scale_up(amount: Decimal, decimals: int) -> int:
    """Inverse of scale_down, truncating anything below the token's resolution"""
    with localcontext() as ctx:
        ctx.prec = SCALING_PRECISION
        return int(amount.scaleb(decimals))


def safe_div(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Division that yields zero instead of raising on a zero denominator"""
    if denominator == 0:
        return Decimal(0)
    return numerator / denominator
