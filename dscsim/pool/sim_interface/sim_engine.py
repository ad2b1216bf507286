from typing import List, Optional

from curvesim.logging import get_logger

from dscsim.exceptions import DSCEngineError
from dscsim.pool.dsc.conf import DEFAULT_LIQUIDATOR, MIN_HEALTH_FACTOR
from dscsim.pool.dsc.engine import DSCEngine

logger = get_logger(__name__)


class Position:
    def __init__(self, user: str, debt: int, collateral_value: int, health):
        self.user = user
        self.debt = debt
        self.collateral_value = collateral_value
        self.health = health


class LiquidatedPosition:
    def __init__(
        self,
        user: str,
        token: str,
        debt_covered: int,
        collateral_seized: int,
        health_before,
        health_after,
        ts: int,
    ):
        self.user = user
        self.token = token
        self.debt_covered = debt_covered
        self.collateral_seized = collateral_seized
        self.health_before = health_before
        self.health_after = health_after
        self.timestamp = ts


class SimDSCEngine(DSCEngine):
    """
    Class to enable use of DSCEngine in simulations by exposing
    price updates, clock updates and a liquidation bot.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # log users that have been liquidated
        self.users_liquidated: List[LiquidatedPosition] = []

    def prepare_for_run(self, prices):
        """
        Sets clocks and feed answers to the first row of the price path.

        Parameters
        ----------
        prices : pandas.DataFrame
            USD prices indexed by timestamp, one column per token
            (address or symbol).
        """
        self.prepare_for_trades(prices.index[0])
        self.update_prices(prices.iloc[0])

    def prepare_for_trades(self, timestamp):
        """
        Updates the engine's and the feeds' _block_timestamp to current sim time.

        Parameters
        ----------
        timestamp : datetime.datetime
            The current timestamp in the simulation.
        """
        super().prepare_for_trades(timestamp)
        for feed in self.oracle.price_feeds.values():
            feed.prepare_for_trades(timestamp)

    def update_prices(self, prices):
        """
        Push USD prices into the feeds of the matching tokens.

        Parameters
        ----------
        prices : pandas.Series or dict
            USD price per token unit keyed by token address or symbol.
            Tokens without a price keep their last answer.
        """
        for address, token in self.collateral_tokens.items():
            key = address if address in prices else token.symbol
            if key not in prices:
                continue
            feed = self.oracle.price_feeds[address]
            feed.update_answer(int(round(prices[key] * 10**feed.decimals)))

    def users_to_liquidate(self) -> List[Position]:
        """
        Returns positions below the minimum health factor.

        Returns
        -------
        List[Position]
            Detailed info about each liquidatable position
        """
        out: List[Position] = []
        for user in self.users:
            health = self.get_health_factor(user)
            if health < MIN_HEALTH_FACTOR:
                debt, collateral_value = self.get_account_information(user)
                out.append(
                    Position(
                        user=user,
                        debt=debt,
                        collateral_value=collateral_value,
                        health=health,
                    )
                )
        return out

    def _largest_collateral(self, user: str) -> Optional[str]:
        best_token = None
        best_value = 0
        for token, amount in self.ledger.collateral_balances(user).items():
            if amount == 0:
                continue
            value = self.get_usd_value(token, amount)
            if best_token is None or value > best_value:
                best_token, best_value = token, value
        return best_token

    def liquidate_users(
        self, liquidator: str = DEFAULT_LIQUIDATOR
    ) -> List[LiquidatedPosition]:
        """
        Liquidate every unhealthy position against its largest collateral.

        The liquidator is funded with freshly minted DSC for any shortfall;
        a failed liquidation discards that funding too.

        Parameters
        ----------
        liquidator : str
            Address of the liquidator

        Returns
        -------
        List[LiquidatedPosition]
            Liquidations performed in this call
        """
        liquidated: List[LiquidatedPosition] = []
        for position in self.users_to_liquidate():
            if position.user == liquidator:
                continue
            token = self._largest_collateral(position.user)
            debt_to_cover = min(
                self.get_debt_to_cover_for_healthy_position(position.user),
                position.debt,
            )
            if token is None or debt_to_cover == 0:
                continue

            snapshot = self.get_snapshot()
            shortfall = debt_to_cover - self.DSC.balanceOf[liquidator]
            if shortfall > 0:
                self.DSC._mint(liquidator, shortfall)
            try:
                seized = self.liquidate(liquidator, token, position.user, debt_to_cover)
            except DSCEngineError as e:
                logger.warning("Liquidation of %s skipped: %s", position.user, e)
                self.revert_to_snapshot(snapshot)
                continue

            record = LiquidatedPosition(
                user=position.user,
                token=token,
                debt_covered=debt_to_cover,
                collateral_seized=seized,
                health_before=position.health,
                health_after=self.get_health_factor(position.user),
                ts=self._block_timestamp,
            )
            logger.info(
                "Liquidated %s: covered %s DSC, seized %s %s",
                position.user,
                debt_to_cover,
                seized,
                token,
            )
            self.users_liquidated.append(record)
            liquidated.append(record)
        return liquidated
