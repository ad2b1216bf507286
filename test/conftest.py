import pytest

from dscsim.pool import get_sim_engine
from dscsim.pool.dsc.conf import COLLATERAL_CONF

WETH = COLLATERAL_CONF["weth"]["address"]
WBTC = COLLATERAL_CONF["wbtc"]["address"]

ETH_USD_PRICE = 2000  # initial WETH feed answer, USD

COLLATERAL_AMOUNT = 10 * 10**18
AMOUNT_TO_MINT = 100 * 10**18
STARTING_BALANCE = 100 * 10**18


def create_engine():
    engine = get_sim_engine()
    for token in engine.collateral_tokens.values():
        for user in ["user_address_%d" % i for i in range(5)]:
            token._mint(user, STARTING_BALANCE)
    return engine


def set_price(engine, token, usd_price):
    """Report a new USD price, observed at the engine's current time."""
    feed = engine.oracle.price_feeds[token]
    feed.update_answer(int(usd_price * 10**feed.decimals), engine._block_timestamp)


@pytest.fixture(scope="module")
def accounts():
    return ["user_address_%d" % i for i in range(5)]


@pytest.fixture
def engine():
    return create_engine()


@pytest.fixture
def dsc(engine):
    return engine.DSC


@pytest.fixture
def weth(engine):
    return engine.collateral_tokens[WETH]


@pytest.fixture
def wbtc(engine):
    return engine.collateral_tokens[WBTC]


@pytest.fixture
def deposited(engine, accounts):
    """Engine where accounts[0] has deposited COLLATERAL_AMOUNT of WETH."""
    engine.deposit_collateral(accounts[0], WETH, COLLATERAL_AMOUNT)
    return engine


@pytest.fixture
def minted(engine, accounts):
    """Engine where accounts[0] has deposited WETH and minted AMOUNT_TO_MINT."""
    engine.deposit_collateral_and_mint_dsc(
        accounts[0], WETH, COLLATERAL_AMOUNT, AMOUNT_TO_MINT
    )
    return engine
