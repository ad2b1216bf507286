from typing import Dict

from curvesim.logging import get_logger

from dscsim.pool.dsc.conf import COLLATERAL_CONF, ENGINE_CONF, TIMEOUT
from dscsim.pool.dsc.price_oracle import PriceFeed
from dscsim.pool.dsc.stablecoin import DecentralizedStableCoin
from dscsim.pool.dsc.utils.ERC20 import ERC20
from dscsim.pool.sim_interface import SimDSCEngine

__all__ = [
    "SimDSCEngine",
    "get_sim_engine",
]

logger = get_logger(__name__)


def get_sim_engine(
    collaterals: Dict[str, dict] = None,
    address: str = ENGINE_CONF["address"],
    timeout: int = TIMEOUT,
) -> SimDSCEngine:
    """
    Factory function for creating a simulation engine with its
    collateral tokens, price feeds and stablecoin.

    Parameters
    ----------
    collaterals : dict, optional
        Token configs keyed by alias, each with "address", "name",
        "symbol", "decimals" and "initial_answer" (feed precision).
        Defaults to the WETH and WBTC markets in COLLATERAL_CONF.
    address : str
        Address of the engine
    timeout : int
        Maximum age of a price answer, in seconds

    Returns
    -------
    SimDSCEngine
    """
    collaterals = collaterals if collaterals is not None else COLLATERAL_CONF

    tokens = []
    feeds = []
    for alias, conf in collaterals.items():
        tokens.append(
            ERC20(
                address=conf["address"],
                name=conf["name"],
                symbol=conf["symbol"],
                decimals=conf["decimals"],
            )
        )
        feeds.append(
            PriceFeed(conf["initial_answer"], description="%s / USD" % (alias))
        )

    engine = SimDSCEngine(
        tokens, feeds, DecentralizedStableCoin(), address=address, timeout=timeout
    )
    logger.debug("Created engine with collaterals: %s", list(collaterals))
    return engine
