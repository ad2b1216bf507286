"""
Per-step engine state, collected into a pandas DataFrame.
"""
from typing import List

from pandas import DataFrame

from dscsim.pool.dsc.health import health_to_float


def get_engine_state(engine) -> dict:
    """Returns engine and users state."""
    users = engine.users
    users_debt = []
    users_collateral_value = []
    users_health = []
    for user in users:
        debt, collateral_value = engine.get_account_information(user)
        users_debt.append(debt / 1e18)
        users_collateral_value.append(collateral_value / 1e18)
        users_health.append(health_to_float(engine.get_health_factor(user)))

    prices = {}
    total_collateral_value = 0
    for address, token in engine.collateral_tokens.items():
        amount = engine.ledger.total_collateral(address)
        prices[token.symbol] = engine.get_usd_value(address, 10**18) / 1e18
        total_collateral_value += engine.get_usd_value(address, amount)

    dsc_supply = engine.DSC.totalSupply
    return {
        "timestamp": engine._block_timestamp,
        **{"price_%s" % (symbol): price for symbol, price in prices.items()},
        # engine state
        "dsc_supply": dsc_supply / 1e18,
        "total_debt": engine.ledger.total_debt() / 1e18,
        "total_collateral_value": total_collateral_value / 1e18,
        "collateral_ratio": (
            total_collateral_value / dsc_supply if dsc_supply > 0 else float("inf")
        ),
        # users state
        "users": list(users),
        "users_debt": users_debt,
        "users_collateral_value": users_collateral_value,
        "users_health": users_health,
        "min_health": min(users_health, default=float("inf")),
        # liquidation
        "liquidation_count": len(engine.users_liquidated),
    }


class StateLog:
    """
    Logger that records engine state after each simulation step.
    """

    __slots__ = ["engine", "states"]

    def __init__(self, engine):
        self.engine = engine
        self.states: List[dict] = []

    def update(self):
        """Records the current engine state."""
        self.states.append(get_engine_state(self.engine))

    def get_logs(self) -> DataFrame:
        """Returns the recorded states, indexed by timestamp."""
        df = DataFrame(self.states)
        if not df.empty:
            df = df.set_index("timestamp")
        return df
