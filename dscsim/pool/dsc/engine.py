"""
Mainly a module to house the `DSCEngine`, the collateral and debt engine
of the Decentralized StableCoin, in Python.

Users lock collateral, mint DSC against it and must keep their health
factor at or above ``MIN_HEALTH_FACTOR`` after every operation touching
their own debt or collateral. Undercollateralized positions can be
liquidated by anyone holding DSC.
"""
from typing import Dict, List, Tuple

from curvesim.logging import get_logger
from curvesim.pool.snapshot import SnapshotMixin

from dscsim.exceptions import (
    LiquidationIneffective,
    LiquidationNotEligible,
    SolvencyViolation,
    TokenNotAllowed,
    TransferFailure,
    ValidationError,
)
from dscsim.pool.snapshot import DSCEngineSnapshot

from .conf import (
    ADDITIONAL_FEED_PRECISION,
    ENGINE_CONF,
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MIN_HEALTH_FACTOR,
    PRECISION,
    TIMEOUT,
)
from .events import CollateralDeposited, CollateralRedeemed
from .health import UNCONSTRAINED, HealthFactor, calculate_health_factor
from .ledger import CollateralLedger
from .price_oracle import PriceFeed, PriceOracleAdapter
from .stablecoin import DecentralizedStableCoin
from .utils import BlocktimestampMixins, ERC20, atomic, nonreentrant

logger = get_logger(__name__)


class DSCEngine(SnapshotMixin, BlocktimestampMixins):  # pylint: disable=too-many-public-methods
    """DSC engine implementation in Python."""

    snapshot_class = DSCEngineSnapshot

    def __init__(
        self,
        collateral_tokens: List[ERC20],
        price_feeds: List[PriceFeed],
        dsc: DecentralizedStableCoin,
        address: str = None,
        timeout: int = TIMEOUT,
    ):
        """
        Engine constructor

        Parameters
        ----------
        collateral_tokens : List[ERC20]
            Tokens accepted as collateral, in registry order
        price_feeds : List[PriceFeed]
            USD price feed of each token, same order and length
        dsc : DecentralizedStableCoin
            The debt token minted and burned by this engine
        address : str
            Address of the engine, which holds all deposited collateral
        timeout : int
            Maximum age of a price answer, in seconds
        """
        if len(collateral_tokens) != len(price_feeds):
            raise ValidationError(
                "Token addresses and price feed addresses must be same length"
            )
        if dsc is None:
            raise ValidationError("DSC token is required")
        if any(token is None for token in collateral_tokens) or any(
            feed is None for feed in price_feeds
        ):
            raise ValidationError("Collateral tokens and price feeds are required")

        token_addresses = [token.address for token in collateral_tokens]
        if len(set(token_addresses)) != len(token_addresses):
            raise ValidationError("Collateral tokens must be unique")

        BlocktimestampMixins.__init__(self)

        self.address = address if address is not None else ENGINE_CONF["address"]
        self.DSC = dsc
        self.collateral_tokens: Dict[str, ERC20] = dict(
            zip(token_addresses, collateral_tokens)
        )
        self.oracle = PriceOracleAdapter(
            dict(zip(token_addresses, price_feeds)),
            timeout=timeout,
            clock=lambda: self._block_timestamp,
        )
        self.ledger = CollateralLedger(token_addresses)
        self.events = []
        self._locked = False

    # Checks

    def _check_amount(self, amount: int):
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise ValidationError(f"Amount must be an integer: {amount!r}")
        if amount <= 0:
            raise ValidationError(f"Amount must be more than zero: {amount}")

    def _check_token(self, token: str):
        if token not in self.collateral_tokens:
            raise TokenNotAllowed(f"Token not allowed: {token}")

    def _emit(self, event):
        logger.debug("Event: %s", event)
        self.events.append(event)

    # Valuation

    def _price(self, token: str, checked: bool) -> int:
        """1e18 based price; 0 on the unchecked path for unusable answers."""
        if checked:
            return self.oracle.get_price(token)
        answer = self.oracle.get_raw_price(token)
        if answer <= 0:
            return 0
        return self.oracle.to_precision(token, answer)

    def _usd_value(self, token: str, amount: int, checked: bool) -> int:
        return self._price(token, checked) * amount // PRECISION

    def _token_amount_from_usd(self, token: str, usd_amount: int, checked: bool) -> int:
        price = self._price(token, checked)
        if price == 0:
            return 0
        return usd_amount * PRECISION // price

    def _collateral_value(self, user: str, checked: bool) -> int:
        total_collateral_value_in_usd: int = 0
        for token, amount in self.ledger.collateral_balances(user).items():
            # assets without balance are not priced
            if amount > 0:
                total_collateral_value_in_usd += self._usd_value(token, amount, checked)
        return total_collateral_value_in_usd

    def _health_factor(self, user: str, checked: bool = True) -> HealthFactor:
        total_dsc_minted: int = self.ledger.debt_of(user)
        if total_dsc_minted == 0:
            return UNCONSTRAINED
        return calculate_health_factor(
            total_dsc_minted, self._collateral_value(user, checked)
        )

    def _revert_if_health_factor_is_broken(self, user: str):
        health_factor = self._health_factor(user)
        if health_factor < MIN_HEALTH_FACTOR:
            raise SolvencyViolation(user, health_factor)

    # Ledger mutation + token movements

    def _deposit_collateral(self, user: str, token: str, amount: int):
        self._check_amount(amount)
        self._check_token(token)
        self.ledger.increase_collateral(user, token, amount)
        self._emit(CollateralDeposited(user, token, amount))
        if not self.collateral_tokens[token].transferFrom(user, self.address, amount):
            raise TransferFailure(f"Collateral transfer from {user} failed")

    def _mint_dsc(self, user: str, amount: int):
        self._check_amount(amount)
        self.ledger.increase_debt(user, amount)
        self._revert_if_health_factor_is_broken(user)
        if not self.DSC.mint(user, amount):
            raise TransferFailure(f"Mint to {user} failed")

    def _redeem_collateral(self, token: str, amount: int, _from: str, _to: str):
        self._check_amount(amount)
        self._check_token(token)
        self.ledger.decrease_collateral(_from, token, amount)
        self._emit(CollateralRedeemed(_from, _to, token, amount))
        if not self.collateral_tokens[token].transfer(self.address, _to, amount):
            raise TransferFailure(f"Collateral transfer to {_to} failed")

    def _burn_dsc(self, amount: int, on_behalf_of: str, dsc_from: str):
        self._check_amount(amount)
        self.ledger.decrease_debt(on_behalf_of, amount)
        if not self.DSC.transferFrom(dsc_from, self.address, amount):
            raise TransferFailure(f"DSC transfer from {dsc_from} failed")
        if not self.DSC.burn(self.address, amount):
            raise TransferFailure("Burn failed")

    # Position operations

    @nonreentrant
    @atomic
    def deposit_collateral(self, user: str, token: str, amount: int):
        """
        Deposit collateral into the engine

        Parameters
        ----------
        user : str
            Depositor address
        token : str
            Address of the collateral token
        amount : int
            Amount of collateral to deposit
        """
        self._deposit_collateral(user, token, amount)

    @nonreentrant
    @atomic
    def mint_dsc(self, user: str, amount: int):
        """
        Mint DSC against the collateral of `user`

        Parameters
        ----------
        user : str
            Minter address
        amount : int
            Amount of DSC to mint; must keep the health factor >= 1e18
        """
        self._mint_dsc(user, amount)
        logger.debug("%s minted %s DSC", user, amount)

    @nonreentrant
    @atomic
    def deposit_collateral_and_mint_dsc(
        self, user: str, token: str, collateral_amount: int, amount_dsc_to_mint: int
    ):
        """
        Deposit collateral and mint DSC in one operation

        Parameters
        ----------
        user : str
            User address
        token : str
            Address of the collateral token
        collateral_amount : int
            Amount of collateral to deposit
        amount_dsc_to_mint : int
            Amount of DSC to mint
        """
        self._deposit_collateral(user, token, collateral_amount)
        self._mint_dsc(user, amount_dsc_to_mint)

    @nonreentrant
    @atomic
    def redeem_collateral(self, user: str, token: str, amount: int):
        """
        Withdraw collateral back to `user`

        Parameters
        ----------
        user : str
            User address
        token : str
            Address of the collateral token
        amount : int
            Amount of collateral to redeem
        """
        self._redeem_collateral(token, amount, user, user)
        self._revert_if_health_factor_is_broken(user)

    @nonreentrant
    @atomic
    def burn_dsc(self, user: str, amount: int):
        """
        Repay debt by burning DSC held by `user`

        Parameters
        ----------
        user : str
            User address
        amount : int
            Amount of DSC to burn, at most the user's debt
        """
        self._burn_dsc(amount, user, user)
        # burning can only raise the health factor
        self._revert_if_health_factor_is_broken(user)

    @nonreentrant
    @atomic
    def redeem_collateral_for_dsc(
        self, user: str, token: str, amount_collateral: int, amount_dsc_to_burn: int
    ):
        """
        Burn DSC and redeem collateral in one operation

        Parameters
        ----------
        user : str
            User address
        token : str
            Address of the collateral token
        amount_collateral : int
            Amount of collateral to redeem
        amount_dsc_to_burn : int
            Amount of DSC to burn
        """
        self._burn_dsc(amount_dsc_to_burn, user, user)
        self._redeem_collateral(token, amount_collateral, user, user)
        self._revert_if_health_factor_is_broken(user)

    @nonreentrant
    @atomic
    def liquidate(
        self, liquidator: str, token: str, user: str, debt_to_cover: int
    ) -> int:
        """
        Repay part of the debt of an unhealthy position in exchange for its
        collateral plus a bonus. The seized collateral is credited to the
        liquidator's position inside the engine.

        Parameters
        ----------
        liquidator : str
            Address paying the DSC
        token : str
            Collateral token to seize
        user : str
            Address of the position to liquidate
        debt_to_cover : int
            Amount of DSC to repay on behalf of `user`

        Returns
        -------
        int
            Amount of collateral seized
        """
        self._check_amount(debt_to_cover)
        self._check_token(token)

        starting_user_health_factor = self._health_factor(user)
        if starting_user_health_factor >= MIN_HEALTH_FACTOR:
            raise LiquidationNotEligible(
                f"Health factor ok: {user} at {starting_user_health_factor}"
            )

        # Single price read for both the debt equivalent and the bonus
        token_amount_from_debt_covered: int = self._token_amount_from_usd(
            token, debt_to_cover, checked=True
        )
        bonus_collateral: int = (
            token_amount_from_debt_covered * LIQUIDATION_BONUS // LIQUIDATION_PRECISION
        )
        total_collateral_to_seize: int = min(
            token_amount_from_debt_covered + bonus_collateral,
            self.ledger.collateral_of(user, token),
        )

        self.ledger.decrease_collateral(user, token, total_collateral_to_seize)
        self.ledger.increase_collateral(liquidator, token, total_collateral_to_seize)
        self._emit(
            CollateralRedeemed(user, liquidator, token, total_collateral_to_seize)
        )
        self._burn_dsc(debt_to_cover, user, liquidator)

        ending_user_health_factor = self._health_factor(user)
        if ending_user_health_factor <= starting_user_health_factor:
            raise LiquidationIneffective(
                f"Health factor not improved: {user} from "
                f"{starting_user_health_factor} to {ending_user_health_factor}"
            )
        self._revert_if_health_factor_is_broken(liquidator)

        logger.debug(
            "%s liquidated %s: covered %s DSC, seized %s of %s",
            liquidator,
            user,
            debt_to_cover,
            total_collateral_to_seize,
            token,
        )
        return total_collateral_to_seize

    # Read-only helpers; none of them consult the staleness policy

    def calculate_health_factor(
        self, total_dsc_minted: int, collateral_value_in_usd: int
    ) -> HealthFactor:
        return calculate_health_factor(total_dsc_minted, collateral_value_in_usd)

    def get_health_factor(self, user: str) -> HealthFactor:
        """
        Health factor of `user` at current raw prices

        Returns
        -------
        int or Unconstrained
            1e18 based ratio, `UNCONSTRAINED` when the user has no debt
        """
        return self._health_factor(user, checked=False)

    def get_account_information(self, user: str) -> Tuple[int, int]:
        """
        Returns
        -------
        Tuple[int, int]
            (total_dsc_minted, collateral_value_in_usd)
        """
        return self.ledger.debt_of(user), self._collateral_value(user, checked=False)

    def get_account_collateral_value(self, user: str) -> int:
        return self._collateral_value(user, checked=False)

    def get_usd_value(self, token: str, amount: int) -> int:
        """
        USD value (1e18 based) of `amount` of `token`; 0 for a non-positive price.
        """
        return self._usd_value(token, amount, checked=False)

    def get_token_amount_from_usd(self, token: str, usd_amount_in_wei: int) -> int:
        """
        Amount of `token` worth `usd_amount_in_wei`; 0 for a non-positive price.
        """
        return self._token_amount_from_usd(token, usd_amount_in_wei, checked=False)

    def get_max_safe_mint(self, user: str) -> int:
        """
        Largest amount `user` can still mint while keeping the health factor
        at or above 1e18.
        """
        total_dsc_minted, collateral_value_in_usd = self.get_account_information(user)
        collateral_adjusted_for_threshold = (
            collateral_value_in_usd * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
        )
        return max(collateral_adjusted_for_threshold - total_dsc_minted, 0)

    def get_max_redeemable_collateral(self, token: str, user: str) -> int:
        """
        Largest amount of `token` that `user` can redeem while keeping the
        health factor at or above 1e18.

        Parameters
        ----------
        token : str
            Address of the collateral token
        user : str
            User address

        Returns
        -------
        int
            Redeemable amount, never more than the deposited balance
        """
        balance = self.ledger.collateral_of(user, token)
        total_dsc_minted = self.ledger.debt_of(user)
        if balance == 0 or total_dsc_minted == 0:
            return balance

        # -(-a // b) rounds up
        required_collateral_value = -(
            -total_dsc_minted * LIQUIDATION_PRECISION // LIQUIDATION_THRESHOLD
        )
        collateral_value_in_usd = self._collateral_value(user, checked=False)
        if collateral_value_in_usd <= required_collateral_value:
            return 0
        excess_value = collateral_value_in_usd - required_collateral_value
        return min(self.get_token_amount_from_usd(token, excess_value), balance)

    def get_debt_to_cover_for_healthy_position(self, user: str) -> int:
        """
        Minimal debt repayment that brings the debt of `user` down to its
        threshold-adjusted collateral value; 0 when already healthy.
        """
        if self.get_health_factor(user) >= MIN_HEALTH_FACTOR:
            return 0
        total_dsc_minted, collateral_value_in_usd = self.get_account_information(user)
        collateral_adjusted_for_threshold = (
            collateral_value_in_usd * LIQUIDATION_THRESHOLD // LIQUIDATION_PRECISION
        )
        return total_dsc_minted - collateral_adjusted_for_threshold

    def get_collateral_balance_of_user(self, user: str, token: str) -> int:
        return self.ledger.collateral_of(user, token)

    def get_collateral_tokens(self) -> List[str]:
        return list(self.ledger.collateral_tokens)

    def get_collateral_token_price_feed(self, token: str) -> PriceFeed:
        return self.oracle.price_feeds.get(token)

    def get_dsc(self) -> DecentralizedStableCoin:
        return self.DSC

    def get_precision(self) -> int:
        return PRECISION

    def get_additional_feed_precision(self) -> int:
        """Rescale factor of the default 8-decimal feeds to 1e18."""
        return ADDITIONAL_FEED_PRECISION

    def get_liquidation_threshold(self) -> int:
        return LIQUIDATION_THRESHOLD

    def get_liquidation_bonus(self) -> int:
        return LIQUIDATION_BONUS

    def get_liquidation_precision(self) -> int:
        return LIQUIDATION_PRECISION

    def get_min_health_factor(self) -> int:
        return MIN_HEALTH_FACTOR

    def get_timeout(self) -> int:
        return self.oracle.timeout

    @property
    def users(self) -> List[str]:
        """Users with a position, in order of creation."""
        return list(self.ledger.users)
