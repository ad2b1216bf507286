"""
Price oracle adapter of the DSC engine.

Normalizes feed answers to 1e18 USD per unit and rejects stale or
non-positive readings on the checked path.
"""
from time import time
from typing import Callable, Dict, Tuple

from curvesim.logging import get_logger

from dscsim.exceptions import StalePrice, TokenNotAllowed

from ..conf import PRECISION, TIMEOUT
from .price_feed import PriceFeed

logger = get_logger(__name__)


class PriceOracleAdapter:
    __slots__ = ("price_feeds", "timeout", "clock")

    def __init__(
        self,
        price_feeds: Dict[str, PriceFeed],
        timeout: int = TIMEOUT,
        clock: Callable[[], int] = None,
    ):
        """
        Parameters
        ----------
        price_feeds : Dict[str, PriceFeed]
            Feed for every registered token
        timeout : int
            Maximum age of an answer, in seconds
        clock : Callable[[], int]
            Returns the current timestamp; defaults to wall-clock time
        """
        self.price_feeds = dict(price_feeds)
        self.timeout = timeout
        self.clock = clock if clock is not None else lambda: int(time())

    def _feed(self, token: str) -> PriceFeed:
        try:
            return self.price_feeds[token]
        except KeyError:
            raise TokenNotAllowed(f"Token not allowed: {token}") from None

    def latest(self, token: str) -> Tuple[int, int]:
        """Raw (answer, observed_at) reading, without any check."""
        return self._feed(token).latest()

    def get_raw_price(self, token: str) -> int:
        """Raw answer at feed precision, as used by the read-only helpers."""
        return self.latest(token)[0]

    def stale_check_latest(self, token: str) -> Tuple[int, int]:
        """
        Reading of the token's feed after validity checks.

        Raises
        ------
        StalePrice
            When the answer is non-positive or older than `timeout`.
        """
        answer, observed_at = self.latest(token)
        if answer <= 0:
            raise StalePrice(f"Non-positive price for {token}: {answer}")
        seconds_since = self.clock() - observed_at
        if seconds_since > self.timeout:
            logger.debug(
                "Stale price for %s: %s seconds old", token, seconds_since
            )
            raise StalePrice(f"Stale price for {token}: {seconds_since}s old")
        return answer, observed_at

    def get_price(self, token: str) -> int:
        """
        Checked USD price of one token unit, 1e18 based.

        Raises
        ------
        StalePrice
            Also when the answer rescales to 0, as small answers of feeds
            with more than 18 decimals do.
        """
        answer, _ = self.stale_check_latest(token)
        price = self.to_precision(token, answer)
        if price <= 0:
            raise StalePrice(f"Non-positive price for {token}: {answer}")
        return price

    def to_precision(self, token: str, answer: int) -> int:
        """Rescale a feed answer to 1e18."""
        decimals = self._feed(token).decimals
        return answer * PRECISION // 10**decimals
