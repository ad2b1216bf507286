"""
Decentralized StableCoin
"""

from .conf import DSC_TOKEN_CONF

from dscsim.pool.dsc.utils.ERC20 import ERC20


class DecentralizedStableCoin(ERC20):
    """
    Debt token whose supply is controlled by the engine.

    `mint` and `burn` report failure through their return value instead of
    raising, so the engine decides how to treat a failed movement.
    """

    def __init__(
        self,
        address: str = DSC_TOKEN_CONF["address"],
        name: str = DSC_TOKEN_CONF["name"],
        symbol: str = DSC_TOKEN_CONF["symbol"],
        decimals: int = DSC_TOKEN_CONF["decimals"],
    ):
        ERC20.__init__(self, address, name, symbol, decimals)

    def mint(self, _to: str, _value: int) -> bool:
        """
        Issue new tokens.

        Parameters
        ----------
        _to : str
            Receiver of the new tokens
        _value : int
            mint amount

        Returns
        -------
        bool
            False for an empty receiver or a non-positive amount
        """
        if not _to or _value <= 0:
            return False
        self._mint(_to, _value)
        return True

    def burn(self, _from: str, _value: int) -> bool:
        """
        Retire tokens held by `_from`.

        Parameters
        ----------
        _from : str
            Holder of the tokens to retire
        _value : int
            burn amount

        Returns
        -------
        bool
            False for a non-positive amount or an insufficient balance
        """
        if _value <= 0 or self.balanceOf[_from] < _value:
            return False
        self._burn(_from, _value)
        return True
