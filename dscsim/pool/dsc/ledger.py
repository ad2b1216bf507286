"""
Per-user collateral and debt balances of the DSC engine.
"""
from collections import defaultdict
from typing import Dict, List, Tuple

from curvesim.pool.snapshot import SnapshotMixin

from dscsim.exceptions import InsufficientBalance, TokenNotAllowed
from dscsim.pool.snapshot import LedgerSnapshot


class CollateralLedger(SnapshotMixin):
    """
    Authoritative store of positions.

    Collateral is keyed by ``(user, token)``, debt by ``user``. Mutators
    keep every balance non-negative and never check solvency themselves.
    """

    snapshot_class = LedgerSnapshot

    __slots__ = (
        "collateral_tokens",
        "collateral_deposited",
        "dsc_minted",
        "users",
    )

    def __init__(self, collateral_tokens: List[str]):
        self.collateral_tokens: Tuple[str] = tuple(collateral_tokens)
        self.collateral_deposited: Dict[Tuple[str, str], int] = defaultdict(int)
        self.dsc_minted: Dict[str, int] = defaultdict(int)
        # users in order of their first deposit or mint
        self.users: List[str] = []

    def _touch(self, user: str):
        if user not in self.users:
            self.users.append(user)

    def _check_token(self, token: str):
        if token not in self.collateral_tokens:
            raise TokenNotAllowed(f"Token not allowed: {token}")

    def increase_collateral(self, user: str, token: str, amount: int):
        self._check_token(token)
        self._touch(user)
        self.collateral_deposited[(user, token)] += amount

    def decrease_collateral(self, user: str, token: str, amount: int):
        """
        Subtract `amount` from the collateral balance of `user`.

        Raises
        ------
        InsufficientBalance
            When the balance is lower than `amount`; nothing is changed.
        """
        self._check_token(token)
        balance = self.collateral_deposited.get((user, token), 0)
        if balance < amount:
            raise InsufficientBalance(
                f"Collateral balance {balance} of {user} is lower than {amount}"
            )
        self.collateral_deposited[(user, token)] = balance - amount

    def increase_debt(self, user: str, amount: int):
        self._touch(user)
        self.dsc_minted[user] += amount

    def decrease_debt(self, user: str, amount: int):
        debt = self.dsc_minted.get(user, 0)
        if debt < amount:
            raise InsufficientBalance(f"Debt {debt} of {user} is lower than {amount}")
        self.dsc_minted[user] = debt - amount

    def collateral_of(self, user: str, token: str) -> int:
        return self.collateral_deposited.get((user, token), 0)

    def collateral_balances(self, user: str) -> Dict[str, int]:
        return {token: self.collateral_of(user, token) for token in self.collateral_tokens}

    def debt_of(self, user: str) -> int:
        return self.dsc_minted.get(user, 0)

    def total_collateral(self, token: str) -> int:
        return sum(
            amount
            for (_, _token), amount in self.collateral_deposited.items()
            if _token == token
        )

    def total_debt(self) -> int:
        return sum(self.dsc_minted.values())
