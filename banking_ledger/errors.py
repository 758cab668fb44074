"""
Error Taxonomy Module

Business-rule failures raised by the ledger core and the tagged result
returned by mutating account operations. All errors are recoverable and
caller-visible; none of them leave an entity in an inconsistent state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .transactions import Transaction


class ErrorKind(Enum):
    """Kinds of ledger failures"""
    INVALID_ARGUMENT = "invalid_argument"          # Malformed input, duplicate keys
    INVALID_AMOUNT = "invalid_amount"              # Non-numeric or non-positive amount
    AMOUNT_OUT_OF_RANGE = "amount_out_of_range"    # Per-transaction bounds
    DAILY_LIMIT_EXCEEDED = "daily_limit_exceeded"  # Cumulative daily withdrawal cap
    INSUFFICIENT_FUNDS = "insufficient_funds"      # Amount exceeds balance


class LedgerError(ValueError):
    """Base class for all ledger business-rule violations"""
    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT


class InvalidArgument(LedgerError):
    kind = ErrorKind.INVALID_ARGUMENT


class InvalidIdentity(InvalidArgument):
    """Identity id or pin failed validation"""


class InvalidAccount(InvalidArgument):
    """Account number or holder name failed validation"""


class InvalidAmount(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT


class AmountOutOfRange(LedgerError):
    kind = ErrorKind.AMOUNT_OUT_OF_RANGE


class DailyLimitExceeded(LedgerError):
    kind = ErrorKind.DAILY_LIMIT_EXCEEDED


class InsufficientFunds(LedgerError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


_ERRORS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: InvalidArgument,
    ErrorKind.INVALID_AMOUNT: InvalidAmount,
    ErrorKind.AMOUNT_OUT_OF_RANGE: AmountOutOfRange,
    ErrorKind.DAILY_LIMIT_EXCEEDED: DailyLimitExceeded,
    ErrorKind.INSUFFICIENT_FUNDS: InsufficientFunds,
}


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a mutating account operation.

    Either a success carrying the recorded transaction, or a failure tagged
    with one ErrorKind and a human-readable message.
    """
    ok: bool
    kind: Optional[ErrorKind] = None
    message: str = ""
    transaction: Optional['Transaction'] = None

    @classmethod
    def success(cls, transaction: 'Transaction', message: str = "") -> 'OperationResult':
        return cls(ok=True, transaction=transaction, message=message)

    @classmethod
    def failure(cls, error: LedgerError) -> 'OperationResult':
        return cls(ok=False, kind=error.kind, message=str(error))

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_error(self) -> None:
        """Raise the exception matching this failure; no-op on success"""
        if self.ok:
            return
        raise _ERRORS_BY_KIND[self.kind](self.message)
