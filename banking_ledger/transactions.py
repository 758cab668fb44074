"""
Transaction Record Module

Immutable records of ledger events. One Transaction is created for every
successful deposit or withdrawal and is never mutated or removed.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
import re

from .errors import InvalidAmount, InvalidArgument
from .money import Money


class TransactionType(Enum):
    """Types of ledger events"""
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


_DISPLAY_PATTERN = re.compile(
    r'^\[(?P<timestamp>[^\]]+)\] (?P<type>[A-Z]+) (?P<amount>\S+)'
    r' \| Balance: (?P<balance_after>\S+)(?: \| (?P<note>.+))?$'
)


@dataclass(frozen=True)
class Transaction:
    """
    Immutable ledger record.

    amount is always positive; balance_after is the account balance
    immediately following this event.
    """
    timestamp: datetime
    transaction_type: TransactionType
    amount: Money
    balance_after: Money
    note: Optional[str] = None

    def __post_init__(self):
        if not self.amount.is_positive():
            raise InvalidAmount("Transaction amount must be positive")

    @property
    def is_deposit(self) -> bool:
        return self.transaction_type == TransactionType.DEPOSIT

    @property
    def is_withdrawal(self) -> bool:
        return self.transaction_type == TransactionType.WITHDRAW

    def to_display_string(self) -> str:
        """Format as "[<timestamp>] <TYPE> <amount> | Balance: <balance>[ | <note>]" """
        line = (
            f"[{self.timestamp.isoformat()}] {self.transaction_type.value} "
            f"{self.amount} | Balance: {self.balance_after}"
        )
        if self.note and self.note.strip():
            line += f" | {self.note}"
        return line

    def __str__(self) -> str:
        return self.to_display_string()

    @classmethod
    def parse(cls, line: str) -> 'Transaction':
        """
        Re-read a transaction from its display form.

        Args:
            line: Output of to_display_string()

        Returns:
            Transaction with the same timestamp, type, amounts and note

        Raises:
            InvalidArgument: If the line is not a transaction display string
        """
        match = _DISPLAY_PATTERN.match(line.rstrip('\r\n')) if isinstance(line, str) else None
        if not match:
            raise InvalidArgument(f"Not a transaction line: {line!r}")

        try:
            transaction_type = TransactionType(match.group('type'))
            timestamp = datetime.fromisoformat(match.group('timestamp'))
            amount = Money.from_string(match.group('amount'))
            balance_after = Money.from_string(match.group('balance_after'))
            return cls(
                timestamp=timestamp,
                transaction_type=transaction_type,
                amount=amount,
                balance_after=balance_after,
                note=match.group('note'),
            )
        except ValueError as e:
            raise InvalidArgument(f"Malformed transaction line {line!r}: {e}") from e
