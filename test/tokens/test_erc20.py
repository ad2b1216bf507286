from dscsim.pool.dsc.stablecoin import DecentralizedStableCoin
from dscsim.pool.dsc.utils.ERC20 import ERC20


def _token():
    return ERC20(address="token_address", name="Token", symbol="TKN", decimals=18)


def test_transfer(accounts):
    token = _token()
    token._mint(accounts[0], 100)

    assert token.transfer(accounts[0], accounts[1], 40)
    assert token.balanceOf[accounts[0]] == 60
    assert token.balanceOf[accounts[1]] == 40
    assert token.totalSupply == 100


def test_transfer_insufficient_balance_fails_without_change(accounts):
    token = _token()
    token._mint(accounts[0], 10)

    assert not token.transferFrom(accounts[0], accounts[1], 11)
    assert not token.transfer(accounts[0], accounts[1], -1)
    assert token.balanceOf[accounts[0]] == 10
    assert token.balanceOf[accounts[1]] == 0


def test_snapshot_restores_balances(accounts):
    token = _token()
    token._mint(accounts[0], 10)
    snapshot = token.get_snapshot()

    token.transfer(accounts[0], accounts[1], 5)
    token._mint(accounts[2], 7)
    token.revert_to_snapshot(snapshot)

    assert token.balanceOf[accounts[0]] == 10
    assert token.balanceOf[accounts[1]] == 0
    assert token.totalSupply == 10


def test_stablecoin_mint_and_burn(accounts):
    dsc = DecentralizedStableCoin()

    assert dsc.mint(accounts[0], 50)
    assert not dsc.mint(accounts[0], 0)
    assert not dsc.mint("", 10)
    assert dsc.totalSupply == 50

    assert not dsc.burn(accounts[0], 51)
    assert not dsc.burn(accounts[0], 0)
    assert dsc.burn(accounts[0], 20)
    assert dsc.balanceOf[accounts[0]] == 30
    assert dsc.totalSupply == 30
