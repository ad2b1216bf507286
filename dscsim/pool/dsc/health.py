"""
Health factor of a position: threshold-adjusted collateral value over debt,
normalized to 1e18.
"""
from typing import Union

from .conf import LIQUIDATION_PRECISION, LIQUIDATION_THRESHOLD, PRECISION

__all__ = [
    "UNCONSTRAINED",
    "Unconstrained",
    "calculate_health_factor",
    "health_to_float",
]


class Unconstrained:
    """
    Health factor of a position without debt.

    Compares greater than any integer health factor and equal only to
    itself. Use the module-level ``UNCONSTRAINED`` instance.
    """

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other):
        return other is self

    def __ne__(self, other):
        return other is not self

    def __lt__(self, other):
        return False

    def __le__(self, other):
        return other is self

    def __gt__(self, other):
        return other is not self

    def __ge__(self, other):
        return True

    def __hash__(self):
        return hash("Unconstrained")

    def __float__(self):
        return float("inf")

    def __repr__(self):
        return "UNCONSTRAINED"


UNCONSTRAINED = Unconstrained()

HealthFactor = Union[int, Unconstrained]


def calculate_health_factor(total_dsc_minted: int, collateral_value_in_usd: int) -> HealthFactor:
    """
    Health factor for the given debt and collateral value.

    Parameters
    ----------
    total_dsc_minted : int
        Outstanding debt (1e18 based)
    collateral_value_in_usd : int
        USD value of all collateral (1e18 based)

    Returns
    -------
    int or Unconstrained
        `UNCONSTRAINED` when there is no debt, otherwise the ratio with
        1e18 == 1.0. Below 1e18 the position can be liquidated.
    """
    if total_dsc_minted == 0:
        return UNCONSTRAINED
    collateral_adjusted_for_threshold = (
        collateral_value_in_usd * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
    )
    return collateral_adjusted_for_threshold * PRECISION // total_dsc_minted


def health_to_float(health_factor: HealthFactor) -> float:
    if health_factor is UNCONSTRAINED:
        return float("inf")
    return health_factor / PRECISION
