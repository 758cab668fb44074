"""
Account Ledger Module

Customer accounts with balance, append-only history and the deposit and
withdrawal rules: per-transaction bounds, a daily withdrawal cap that
rolls over at calendar-day boundaries, and insufficient-funds checks.
"""

import re
import threading
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple, Union

from .errors import (
    AmountOutOfRange, DailyLimitExceeded, InsufficientFunds, InvalidAccount,
    InvalidAmount, LedgerError, OperationResult
)
from .logging_config import get_logger, log_action
from .money import Money, Numeric
from .transactions import Transaction, TransactionType

# Limits
MIN_DEPOSIT = Money(Decimal('10.00'))
MAX_DEPOSIT = Money(Decimal('100000.00'))
MAX_WITHDRAW_PER_TX = Money(Decimal('5000.00'))
MAX_WITHDRAW_DAILY = Money(Decimal('10000.00'))

INITIAL_BALANCE_NOTE = "Initial balance"
EMPTY_HISTORY_LINE = "(No transactions yet)"

_ACCOUNT_NUMBER_PATTERN = re.compile(r'^\d{8}$')
_HOLDER_NAME_PATTERN = re.compile(r'^[A-Za-z\s]+$')

Clock = Callable[[], datetime]
Amount = Union[Money, Numeric]

logger = get_logger("banking_ledger.accounts")


def validate_account_number(account_number: str) -> None:
    if not isinstance(account_number, str) or not _ACCOUNT_NUMBER_PATTERN.match(account_number):
        raise InvalidAccount("Account number must be exactly 8 digits.")


def validate_holder_name(holder_name: str) -> None:
    if (not isinstance(holder_name, str)
            or len(holder_name.strip()) < 3
            or not _HOLDER_NAME_PATTERN.match(holder_name)):
        raise InvalidAccount("Name must be letters/spaces only, min length 3.")


class Account:
    """
    Bank account owned by exactly one customer Identity.

    The balance never goes negative and the daily withdrawal total never
    exceeds MAX_WITHDRAW_DAILY after a successful withdrawal. Time enters
    only through the injected clock (or an explicit `today` argument).
    """

    def __init__(self, account_number: str, holder_name: str,
                 initial_balance: Amount = Decimal('0'),
                 clock: Optional[Clock] = None):
        validate_account_number(account_number)
        validate_holder_name(holder_name)

        self._clock: Clock = clock or datetime.now
        self._account_number = account_number
        self._holder_name = holder_name
        self._balance = Money.non_negative(initial_balance)
        self._daily_withdraw_total = Money.zero()
        self._last_withdrawal_day: date = self._clock().date()
        self._history: List[Transaction] = []
        self._lock = threading.RLock()

        if self._balance.is_positive():
            self._history.append(Transaction(
                timestamp=self._clock(),
                transaction_type=TransactionType.DEPOSIT,
                amount=self._balance,
                balance_after=self._balance,
                note=INITIAL_BALANCE_NOTE
            ))

    # Accessors

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def holder_name(self) -> str:
        return self._holder_name

    @property
    def balance(self) -> Money:
        return self._balance

    @property
    def daily_withdraw_total(self) -> Money:
        return self._daily_withdraw_total

    @property
    def last_withdrawal_day(self) -> date:
        return self._last_withdrawal_day

    @property
    def history(self) -> Tuple[Transaction, ...]:
        """Snapshot of the transaction history, oldest first"""
        with self._lock:
            return tuple(self._history)

    def check_balance(self) -> Money:
        return self._balance

    def daily_remaining(self, today: Optional[date] = None) -> Money:
        """Withdrawal allowance left for the given (or current) day"""
        today = today or self._clock().date()
        with self._lock:
            if today != self._last_withdrawal_day:
                return MAX_WITHDRAW_DAILY
            return MAX_WITHDRAW_DAILY - self._daily_withdraw_total

    def summary(self) -> Dict[str, str]:
        return {
            'account_number': self._account_number,
            'holder_name': self._holder_name,
            'balance': self._balance.to_display_string(),
        }

    def format_history(self) -> List[str]:
        """Display lines for the history, or a placeholder when empty"""
        history = self.history
        if not history:
            return [EMPTY_HISTORY_LINE]
        return [transaction.to_display_string() for transaction in history]

    # Operations

    def deposit(self, amount: Amount) -> OperationResult:
        """
        Deposit an amount between MIN_DEPOSIT and MAX_DEPOSIT inclusive.

        Returns:
            Success carrying the DEPOSIT transaction, or a failure tagged
            INVALID_AMOUNT / AMOUNT_OUT_OF_RANGE with nothing changed
        """
        with self._lock:
            try:
                transaction = self._apply_deposit(amount)
            except LedgerError as e:
                log_action(logger, "info", f"Deposit rejected: {e}",
                           user_id=self._account_number, action="deposit_rejected",
                           resource="account", details={'kind': e.kind.value})
                return OperationResult.failure(e)

        log_action(logger, "info", "Deposit posted",
                   user_id=self._account_number, action="deposit", resource="account",
                   details={'amount': str(transaction.amount),
                            'balance_after': str(transaction.balance_after)})
        return OperationResult.success(
            transaction,
            f"Deposited: {transaction.amount} | New Balance: {transaction.balance_after}"
        )

    def withdraw(self, amount: Amount, today: Optional[date] = None) -> OperationResult:
        """
        Withdraw an amount subject to the per-transaction cap, the daily cap
        and the current balance, checked in that order.

        Once the amount passes the per-transaction cap, the daily total is
        reset whenever `today` differs from the last withdrawal day; that
        reset stays in place even when the withdrawal is then rejected.

        Args:
            amount: Amount to withdraw
            today: Calendar day to evaluate the daily cap for; defaults to
                the account clock

        Returns:
            Success carrying the WITHDRAW transaction, or a failure tagged
            INVALID_AMOUNT / AMOUNT_OUT_OF_RANGE / DAILY_LIMIT_EXCEEDED /
            INSUFFICIENT_FUNDS
        """
        with self._lock:
            try:
                transaction = self._apply_withdrawal(amount, today)
            except LedgerError as e:
                log_action(logger, "info", f"Withdrawal rejected: {e}",
                           user_id=self._account_number, action="withdraw_rejected",
                           resource="account", details={'kind': e.kind.value})
                return OperationResult.failure(e)
            daily_total = self._daily_withdraw_total

        log_action(logger, "info", "Withdrawal posted",
                   user_id=self._account_number, action="withdraw", resource="account",
                   details={'amount': str(transaction.amount),
                            'balance_after': str(transaction.balance_after),
                            'daily_total': str(daily_total)})
        return OperationResult.success(
            transaction,
            f"Withdrawn: {transaction.amount} | New Balance: {transaction.balance_after}"
        )

    def _apply_deposit(self, amount: Amount) -> Transaction:
        amt = Money.of(amount)
        if amt < MIN_DEPOSIT:
            raise AmountOutOfRange(f"Minimum deposit is {MIN_DEPOSIT}")
        if amt > MAX_DEPOSIT:
            raise AmountOutOfRange(f"Maximum deposit is {MAX_DEPOSIT}")

        self._balance = self._balance + amt
        transaction = Transaction(
            timestamp=self._clock(),
            transaction_type=TransactionType.DEPOSIT,
            amount=amt,
            balance_after=self._balance
        )
        self._history.append(transaction)
        return transaction

    def _apply_withdrawal(self, amount: Amount, today: Optional[date]) -> Transaction:
        amt = Money.of(amount)
        if not amt.is_positive():
            raise InvalidAmount("Withdrawal must be positive.")
        if amt > MAX_WITHDRAW_PER_TX:
            raise AmountOutOfRange(f"Max per transaction: {MAX_WITHDRAW_PER_TX}")

        now = self._clock()
        today = today or now.date()
        if today != self._last_withdrawal_day:
            self._daily_withdraw_total = Money.zero()
            self._last_withdrawal_day = today

        new_daily = self._daily_withdraw_total + amt
        if new_daily > MAX_WITHDRAW_DAILY:
            raise DailyLimitExceeded(
                f"Daily limit exceeded ({MAX_WITHDRAW_DAILY}). Used: {self._daily_withdraw_total}"
            )

        if amt > self._balance:
            raise InsufficientFunds(
                f"Insufficient funds. Balance: {self._balance}, Requested: {amt}"
            )

        self._balance = self._balance - amt
        self._daily_withdraw_total = new_daily

        transaction = Transaction(
            timestamp=now,
            transaction_type=TransactionType.WITHDRAW,
            amount=amt,
            balance_after=self._balance,
            note=f"Daily used: {self._daily_withdraw_total}/{MAX_WITHDRAW_DAILY}"
        )
        self._history.append(transaction)
        return transaction

    def __repr__(self) -> str:
        return (f"Account(account_number={self._account_number!r}, "
                f"holder_name={self._holder_name!r}, balance={self._balance})")
