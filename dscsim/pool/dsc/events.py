"""
Records appended to the engine's event log for external observers.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class CollateralDeposited:
    user: str
    token: str
    amount: int


@dataclass(frozen=True)
class CollateralRedeemed:
    redeemed_from: str
    redeemed_to: str
    token: str
    amount: int
