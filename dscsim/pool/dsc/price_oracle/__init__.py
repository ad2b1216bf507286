__all__ = [
    "PriceFeed",
    "PriceOracleAdapter",
]

from .price_feed import PriceFeed
from .oracle_adapter import PriceOracleAdapter
