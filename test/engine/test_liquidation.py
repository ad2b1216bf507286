import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dscsim.exceptions import (
    DSCEngineError,
    InsufficientBalance,
    LiquidationIneffective,
    LiquidationNotEligible,
    SolvencyViolation,
    StalePrice,
    TokenNotAllowed,
    TransferFailure,
    ValidationError,
)
from dscsim.pool.dsc import UNCONSTRAINED, CollateralRedeemed

from ..conftest import (
    AMOUNT_TO_MINT,
    COLLATERAL_AMOUNT,
    WBTC,
    WETH,
    create_engine,
    set_price,
)

DEBT_TO_COVER = 10 * 10**18


def _open_liquidator(engine, liquidator, dsc_amount=AMOUNT_TO_MINT):
    """WBTC backed position whose health does not move with WETH."""
    engine.deposit_collateral_and_mint_dsc(
        liquidator, WBTC, COLLATERAL_AMOUNT, dsc_amount
    )


@pytest.fixture
def liquidator(minted, accounts):
    _open_liquidator(minted, accounts[1])
    return accounts[1]


def _state(engine):
    return (
        dict(engine.ledger.collateral_deposited),
        dict(engine.ledger.dsc_minted),
        dict(engine.DSC.balanceOf),
        engine.DSC.totalSupply,
        len(engine.events),
    )


def test_cant_liquidate_healthy_position(minted, liquidator, accounts):
    with pytest.raises(LiquidationNotEligible, match="Health factor ok"):
        minted.liquidate(liquidator, WETH, accounts[0], DEBT_TO_COVER)


def test_cant_liquidate_position_without_debt(deposited, accounts):
    with pytest.raises(LiquidationNotEligible):
        deposited.liquidate(accounts[1], WETH, accounts[0], DEBT_TO_COVER)


def test_liquidate_validates_arguments(minted, liquidator, accounts):
    set_price(minted, WETH, 18)
    with pytest.raises(ValidationError):
        minted.liquidate(liquidator, WETH, accounts[0], 0)
    with pytest.raises(TokenNotAllowed):
        minted.liquidate(liquidator, "random_address", accounts[0], DEBT_TO_COVER)


def test_liquidation_improves_health_factor(minted, liquidator, dsc, accounts):
    user = accounts[0]
    set_price(minted, WETH, 18)
    health_before = minted.get_health_factor(user)
    assert health_before == 9 * 10**17

    seized = minted.liquidate(liquidator, WETH, user, DEBT_TO_COVER)

    # $10 of WETH at $18, plus the 10% bonus
    token_amount = DEBT_TO_COVER * 10**18 // (18 * 10**18)
    assert seized == token_amount + token_amount // 10
    assert minted.get_health_factor(user) > health_before

    assert minted.get_collateral_balance_of_user(user, WETH) == COLLATERAL_AMOUNT - seized
    assert minted.get_collateral_balance_of_user(liquidator, WETH) == seized
    assert minted.get_account_information(user)[0] == AMOUNT_TO_MINT - DEBT_TO_COVER
    assert minted.get_account_information(liquidator)[0] == AMOUNT_TO_MINT

    assert dsc.balanceOf[liquidator] == AMOUNT_TO_MINT - DEBT_TO_COVER
    assert dsc.totalSupply == 2 * AMOUNT_TO_MINT - DEBT_TO_COVER
    assert minted.events[-1] == CollateralRedeemed(user, liquidator, WETH, seized)


def test_liquidation_seizure_is_clamped_to_balance(minted, liquidator, accounts):
    user = accounts[0]
    set_price(minted, WETH, 1)

    seized = minted.liquidate(liquidator, WETH, user, AMOUNT_TO_MINT)

    assert seized == COLLATERAL_AMOUNT
    assert minted.get_collateral_balance_of_user(user, WETH) == 0
    assert minted.get_collateral_balance_of_user(liquidator, WETH) == COLLATERAL_AMOUNT
    assert minted.get_health_factor(user) is UNCONSTRAINED


def test_liquidation_that_does_not_improve_is_discarded(minted, liquidator, accounts):
    set_price(minted, WETH, 10)
    before = _state(minted)

    with pytest.raises(LiquidationIneffective, match="Health factor not improved"):
        minted.liquidate(liquidator, WETH, accounts[0], DEBT_TO_COVER)

    assert _state(minted) == before


def test_liquidator_must_stay_healthy(minted, accounts):
    liquidator = accounts[1]
    minted.deposit_collateral_and_mint_dsc(liquidator, WETH, 10**18, 900 * 10**18)
    set_price(minted, WETH, 18)
    before = _state(minted)

    with pytest.raises(SolvencyViolation) as e:
        minted.liquidate(liquidator, WETH, accounts[0], DEBT_TO_COVER)

    assert e.value.user == liquidator
    assert _state(minted) == before


def test_liquidator_without_dsc(minted, accounts):
    set_price(minted, WETH, 18)
    before = _state(minted)

    with pytest.raises(TransferFailure):
        minted.liquidate(accounts[2], WETH, accounts[0], DEBT_TO_COVER)

    assert _state(minted) == before
    assert minted.get_collateral_balance_of_user(accounts[2], WETH) == 0


def test_cant_cover_more_than_the_debt(minted, accounts):
    liquidator = accounts[1]
    _open_liquidator(minted, liquidator, dsc_amount=2 * AMOUNT_TO_MINT)
    set_price(minted, WETH, 18)

    with pytest.raises(InsufficientBalance):
        minted.liquidate(liquidator, WETH, accounts[0], AMOUNT_TO_MINT + 1)


def test_liquidation_requires_fresh_price(minted, liquidator, accounts):
    set_price(minted, WETH, 18)
    minted._increment_timestamp(timedelta=minted.get_timeout() + 1)

    with pytest.raises(StalePrice):
        minted.liquidate(liquidator, WETH, accounts[0], DEBT_TO_COVER)


@settings(max_examples=50, deadline=None)
@given(
    usd_price=st.integers(min_value=2, max_value=40),
    debt_to_cover=st.integers(min_value=1, max_value=AMOUNT_TO_MINT),
)
def test_liquidation_outcome(usd_price, debt_to_cover):
    engine = create_engine()
    user, liquidator = "user_address_0", "user_address_1"
    engine.deposit_collateral_and_mint_dsc(user, WETH, COLLATERAL_AMOUNT, AMOUNT_TO_MINT)
    _open_liquidator(engine, liquidator)
    set_price(engine, WETH, usd_price)

    health_before = engine.get_health_factor(user)
    supply_before = engine.DSC.totalSupply
    before = _state(engine)

    try:
        engine.liquidate(liquidator, WETH, user, debt_to_cover)
    except LiquidationNotEligible:
        assert health_before >= engine.get_min_health_factor()
        assert _state(engine) == before
        return
    except DSCEngineError:
        assert _state(engine) == before
        return

    assert health_before < engine.get_min_health_factor()
    assert engine.get_health_factor(user) > health_before
    assert engine.DSC.totalSupply == supply_before - debt_to_cover
    assert engine.get_health_factor(liquidator) >= engine.get_min_health_factor()


def _total_collateral_value(engine):
    return sum(
        engine.get_usd_value(token, engine.ledger.total_collateral(token))
        for token in engine.get_collateral_tokens()
    )


def test_liquidation_after_crash_breaks_solvency(engine, dsc, accounts):
    thin, thick, liquidator = accounts[:3]
    # both at $20,000 of WETH; `thin` sits exactly at the threshold
    engine.deposit_collateral_and_mint_dsc(thin, WETH, COLLATERAL_AMOUNT, 10_000 * 10**18)
    engine.deposit_collateral_and_mint_dsc(thick, WETH, COLLATERAL_AMOUNT, 6_000 * 10**18)
    assert _total_collateral_value(engine) >= dsc.totalSupply

    set_price(engine, WETH, 700)
    assert _total_collateral_value(engine) < dsc.totalSupply

    health_before = engine.get_health_factor(thick)
    debt_to_cover = engine.get_debt_to_cover_for_healthy_position(thick)
    assert debt_to_cover == 2_500 * 10**18
    _open_liquidator(engine, liquidator, dsc_amount=debt_to_cover)

    seized = engine.liquidate(liquidator, WETH, thick, debt_to_cover)

    assert seized > 0
    assert engine.get_health_factor(thick) > health_before
    assert engine.get_account_information(thick)[0] == 3_500 * 10**18
    assert engine.get_health_factor(liquidator) >= engine.get_min_health_factor()
