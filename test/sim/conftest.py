import pytest

from ..conftest import AMOUNT_TO_MINT, COLLATERAL_AMOUNT, WETH, create_engine


@pytest.fixture
def sim_engine():
    """Engine where user_address_0 holds 10 WETH against 100 DSC."""
    engine = create_engine()
    engine.deposit_collateral_and_mint_dsc(
        "user_address_0", WETH, COLLATERAL_AMOUNT, AMOUNT_TO_MINT
    )
    return engine
