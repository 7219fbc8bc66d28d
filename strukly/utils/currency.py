"""
Rupiah formatting helpers.
"""

from typing import Union


def format_rupiah(amount: Union[int, float]) -> str:
    """
    Formats an amount in the smallest currency unit the Indonesian way.

    >>> format_rupiah(2100000)
    'Rp 2.100.000'
    >>> format_rupiah(-1500)
    '-Rp 1.500'
    """
    value = int(round(amount))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_percentage(part: Union[int, float], whole: Union[int, float]) -> str:
    """Share of `part` in `whole` as a one-decimal percentage string."""
    if not whole:
        return "0.0%"
    return f"{part / whole:.1%}"
