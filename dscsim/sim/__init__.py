"""
A simulation opens positions on a DSC engine, replays a price path through
its feeds and lets a liquidation bot close positions that fall below the
minimum health factor.

Most users will want to use the `autosim` function, which defaults to the
WETH and WBTC markets, a handful of positions and a linear price crash.
"""
from datetime import datetime, timedelta

import numpy as np
from pandas import DataFrame

from curvesim.logging import get_logger

from dscsim.pipelines.simple import pipeline
from dscsim.pool import get_sim_engine
from dscsim.pool.dsc.conf import COLLATERAL_CONF

logger = get_logger(__name__)

DEFAULT_POSITIONS = [
    {"user": "user_0", "token": "weth", "collateral": 10 * 10**18, "debt": 8000 * 10**18},
    {"user": "user_1", "token": "weth", "collateral": 10 * 10**18, "debt": 6000 * 10**18},
    {"user": "user_2", "token": "wbtc", "collateral": 5 * 10**18, "debt": 1500 * 10**18},
    {"user": "user_3", "token": "wbtc", "collateral": 8 * 10**18, "debt": 3000 * 10**18},
]


def generate_prices(
    collaterals=None,
    crash: float = 0.4,
    steps: int = 288,
    interval: timedelta = timedelta(minutes=5),
    start: datetime = datetime(2024, 1, 1),
) -> DataFrame:
    """
    Linear price path from each collateral's initial answer down by `crash`.

    Returns
    -------
    pandas.DataFrame
        USD prices indexed by timestamp, one column per token symbol
    """
    collaterals = collaterals if collaterals is not None else COLLATERAL_CONF
    index = [start + interval * i for i in range(steps)]
    data = {}
    for conf in collaterals.values():
        p0 = conf["initial_answer"] / 10**8
        data[conf["symbol"]] = np.linspace(p0, p0 * (1 - crash), steps)
    return DataFrame(data, index=index)


def autosim(
    prices=None,
    positions=None,
    collaterals=None,
    liquidate=True,
    **kwargs,
):
    """
    Simulates a DSC engine over a price path.

    Parameters
    ----------
    prices: pandas.DataFrame, optional
        USD prices indexed by timestamp, one column per token (address or
        symbol). Defaults to :func:`generate_prices` called with `kwargs`.

    positions: list of dict, optional
        Positions opened before the run, each with "user", "token" (alias
        or address), "collateral" and "debt". Defaults to DEFAULT_POSITIONS.

    collaterals: dict, optional
        Collateral configs, see :func:`dscsim.pool.get_sim_engine`.

    liquidate: bool, default=True
        Run the liquidation bot after every price update.

    Returns
    -------
    pandas.DataFrame
        Engine state after every step, indexed by timestamp.
    """
    collaterals = collaterals if collaterals is not None else COLLATERAL_CONF
    positions = positions if positions is not None else DEFAULT_POSITIONS
    if prices is None:
        prices = generate_prices(collaterals, **kwargs)

    engine = get_sim_engine(collaterals)
    engine.prepare_for_run(prices)
    _open_positions(engine, collaterals, positions)

    return pipeline(engine, prices, liquidate=liquidate)


def _open_positions(engine, collaterals, positions):
    for position in positions:
        token = position["token"]
        if token in collaterals:
            token = collaterals[token]["address"]
        user = position["user"]
        engine.collateral_tokens[token]._mint(user, position["collateral"])
        engine.deposit_collateral_and_mint_dsc(
            user, token, position["collateral"], position["debt"]
        )
        logger.debug("Opened position for %s", user)
