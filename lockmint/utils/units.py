"""Conversion between display amounts and the smallest unit of an asset."""

from decimal import Decimal
from typing import Union

DECIMALS = {
    "BTC": 8,
}


def _decimals(asset: str) -> int:
    try:
        return DECIMALS[asset.upper()]
    except KeyError:
        raise ValueError(f"Unsupported asset: {asset}")


def to_smallest(amount: Union[Decimal, str, int], asset: str = "BTC") -> int:
    """Convert an amount such as ``Decimal("0.0011")`` BTC into satoshis."""
    scaled = Decimal(str(amount)) * (10 ** _decimals(asset))
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{amount} {asset} has more precision than the asset supports")
    return int(scaled)


def from_smallest(amount: int, asset: str = "BTC") -> Decimal:
    return Decimal(amount) / (10 ** _decimals(asset))
