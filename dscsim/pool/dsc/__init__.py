"""
Submodule for the Decentralized StableCoin engine.
"""

__all__ = [
    "DSCEngine",
    "CollateralLedger",
    "DecentralizedStableCoin",
    "PriceFeed",
    "PriceOracleAdapter",
    "ERC20",
    "UNCONSTRAINED",
    "calculate_health_factor",
    "CollateralDeposited",
    "CollateralRedeemed",
]

from .engine import DSCEngine
from .events import CollateralDeposited, CollateralRedeemed
from .health import UNCONSTRAINED, calculate_health_factor
from .ledger import CollateralLedger
from .price_oracle import PriceFeed, PriceOracleAdapter
from .stablecoin import DecentralizedStableCoin
from .utils import ERC20
