from typing import Tuple

from ..conf import ORACLE_CONF
from ..utils import BlocktimestampMixins


class PriceFeed(BlocktimestampMixins):
    """
    USD price feed for one collateral asset.

    Answers are kept at the feed's native precision (8 decimals by
    default) and clamped to [min_answer, max_answer], the way aggregator
    feeds bound their reports.
    """

    def __init__(
        self,
        answer: int,
        decimals: int = ORACLE_CONF["decimals"],
        min_answer: int = ORACLE_CONF["min_answer"],
        max_answer: int = ORACLE_CONF["max_answer"],
        description: str = "",
    ):
        super().__init__()
        self.decimals = decimals
        self.min_answer = min_answer
        self.max_answer = max_answer
        self.description = description
        self.round_id = 0
        self._answer = 0
        self._updated_at = 0
        self.update_answer(answer)

    def update_answer(self, answer: int, observed_at: int = None):
        """
        Report a new answer.

        Parameters
        ----------
        answer : int
            Price at the feed's precision
        observed_at : int, optional
            Observation time; defaults to the feed's block timestamp
        """
        self._answer = min(max(answer, self.min_answer), self.max_answer)
        self._updated_at = (
            observed_at if observed_at is not None else self._block_timestamp
        )
        self.round_id += 1

    def latest(self) -> Tuple[int, int]:
        """
        Returns
        -------
        (answer, observed_at) : Tuple[int, int]
        """
        return self._answer, self._updated_at
