"""
Implements the simple price-path pipeline: feed prices step by step,
liquidate unhealthy positions and record engine state.
"""
from curvesim.logging import get_logger

from dscsim.metrics import StateLog
from dscsim.pool.dsc.conf import DEFAULT_LIQUIDATOR

logger = get_logger(__name__)


def pipeline(engine, prices, liquidate=True, liquidator=DEFAULT_LIQUIDATOR):
    """
    Replay a price path against an engine.

    Parameters
    ----------
    engine : SimDSCEngine
        Engine with positions already opened
    prices : pandas.DataFrame
        USD prices indexed by timestamp, one column per token
        (address or symbol)
    liquidate : bool, default=True
        Run the liquidation bot after every price update
    liquidator : str
        Address of the liquidation bot

    Returns
    -------
    pandas.DataFrame
        Engine state after every step, indexed by timestamp
    """
    logger.info("Simulating %s steps for %s users", len(prices), len(engine.users))
    state_log = StateLog(engine)
    engine.prepare_for_run(prices)

    for timestamp, row in prices.iterrows():
        engine.prepare_for_trades(timestamp)
        engine.update_prices(row)
        if liquidate:
            engine.liquidate_users(liquidator)
        state_log.update()

    logger.info("Liquidations: %s", len(engine.users_liquidated))
    return state_log.get_logs()
