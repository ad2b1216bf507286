"""
Exceptions raised by the DSC engine.

Every error is fatal to the operation that raised it: the engine restores
its pre-call snapshot before the exception leaves the entry point.
"""
from curvesim.exceptions import CurvesimException


class DSCEngineError(CurvesimException):
    """Base exception class for the DSC engine."""


class ValidationError(DSCEngineError, ValueError):
    """Raised for zero amounts, unknown assets and bad construction args."""


class TokenNotAllowed(ValidationError):
    """Raised when an asset is not in the collateral registry."""


class InsufficientBalance(ValidationError):
    """Raised when a ledger balance would go negative."""


class TransferFailure(DSCEngineError):
    """Raised when a collateral or DSC movement did not succeed."""


class SolvencyViolation(DSCEngineError):
    """Raised when an operation would leave a position below the minimum health factor."""

    def __init__(self, user, health_factor):
        self.user = user
        self.health_factor = health_factor
        super().__init__(f"Breaks health factor: {user} at {health_factor}")


class LiquidationNotEligible(DSCEngineError):
    """Raised when liquidating a position that is still healthy."""


class LiquidationIneffective(DSCEngineError):
    """Raised when a liquidation did not improve the target's health factor."""


class StalePrice(DSCEngineError):
    """Raised when an oracle answer is non-positive or too old."""


class ReentrancyError(DSCEngineError):
    """Raised on re-entry into a mutating entry point."""
