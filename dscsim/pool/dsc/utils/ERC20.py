"""
Fungible token model used for collateral and for the stablecoin.
"""
from collections import defaultdict

from curvesim.pool.snapshot import SnapshotMixin

from dscsim.pool.snapshot import ERC20Snapshot


class ERC20(SnapshotMixin):
    __slots__ = (
        "address",
        "name",
        "symbol",
        "decimals",
        "balanceOf",
        "totalSupply",
    )

    snapshot_class = ERC20Snapshot

    def __init__(
        self,
        address: str,
        name: str,
        symbol: str,
        decimals: int,
    ):
        self.address = address
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.balanceOf = defaultdict(int)
        self.totalSupply = 0

    def transfer(self, _from: str, _to: str, _value: int) -> bool:
        """
        ERC20 transfer

        Parameters
        ----------
        _from : str
            Address of from user
        _to : str
            Address of to user
        _value : int
            transfer amount

        Returns
        -------
        bool
            whether the transfer succeeded; balances are untouched otherwise
        """
        if _value < 0 or self.balanceOf[_from] < _value:
            return False
        self.balanceOf[_from] -= _value
        self.balanceOf[_to] += _value
        return True

    def transferFrom(self, _from: str, _to: str, _value: int) -> bool:
        """
        ERC20 transferFrom. Allowances are not modelled.

        Parameters
        ----------
        _from : str
            Address of from user
        _to : str
            Address of to user
        _value : int
            transfer amount

        Returns
        -------
        bool
            whether the transfer succeeded; balances are untouched otherwise
        """
        return self.transfer(_from, _to, _value)

    def _mint(self, _to: str, _value: int):
        self.balanceOf[_to] += _value
        self.totalSupply += _value

    def _burn(self, _to: str, _value: int):
        assert self.balanceOf[_to] - _value >= 0, "insufficient balance"
        self.balanceOf[_to] -= _value
        self.totalSupply -= _value
