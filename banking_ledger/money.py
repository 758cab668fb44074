"""
Money Module

Fixed-precision monetary amounts. Every value is a Decimal quantized to
two fractional digits with ROUND_HALF_UP, re-applied after each
arithmetic step. NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from dataclasses import dataclass
from typing import Union
import re

from .errors import InvalidAmount

# High precision for intermediate results; quantize brings it back to cents
getcontext().prec = 28

CENTS = Decimal('0.01')

_NUMERIC_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')

Numeric = Union[Decimal, int, float, str]


def round_half_up(value: Decimal) -> Decimal:
    """Quantize a Decimal to two fractional digits, half away from zero"""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, order=True)
class Money:
    """
    Immutable two-digit monetary amount.
    All balances, limits and transaction amounts use this class.
    """
    amount: Decimal

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', _to_decimal(self.amount))
        if not self.amount.is_finite():
            raise InvalidAmount(f"Amount must be a finite number, got {self.amount}")
        try:
            rounded = round_half_up(self.amount)
        except InvalidOperation:
            raise InvalidAmount(f"Amount is too large to represent: {self.amount}")
        object.__setattr__(self, 'amount', rounded)

    # Construction

    @classmethod
    def of(cls, value: Union['Money', Numeric]) -> 'Money':
        """Build Money from any supported numeric input"""
        if isinstance(value, Money):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, float):
            return cls.from_float(value)
        if isinstance(value, (Decimal, int)) and not isinstance(value, bool):
            return cls(Decimal(value))
        raise InvalidAmount(f"Unsupported amount type: {type(value).__name__}")

    @classmethod
    def from_string(cls, value: str) -> 'Money':
        """
        Parse a decimal string such as "10.005" or "250".

        Raises:
            InvalidAmount: If the string is not a plain decimal number
        """
        if not isinstance(value, str) or not value.strip():
            raise InvalidAmount("Amount must be a non-empty string")
        clean_value = value.strip()
        if not _NUMERIC_PATTERN.match(clean_value):
            raise InvalidAmount(f"Cannot convert '{value}' to an amount")
        return cls(Decimal(clean_value))

    @classmethod
    def from_float(cls, value: float) -> 'Money':
        """
        Convert a float via its shortest repr, so 10.005 rounds to 10.01
        rather than to the binary approximation below it.
        """
        return cls(_to_decimal(value))

    @classmethod
    def non_negative(cls, value: Union['Money', Numeric]) -> 'Money':
        """Build Money, rejecting negative amounts"""
        money = cls.of(value)
        if money.is_negative():
            raise InvalidAmount(f"Amount cannot be negative: {money}")
        return money

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal('0'))

    # Arithmetic

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - other.amount)

    def add(self, other: 'Money') -> 'Money':
        return self + other

    def subtract(self, other: 'Money') -> 'Money':
        return self - other

    def compare(self, other: 'Money') -> int:
        """Three-way comparison: -1, 0 or 1"""
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    # State checks

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_display_string(self) -> str:
        """Plain two-digit form, e.g. 1500.00"""
        return f"{self.amount:.2f}"

    def __str__(self) -> str:
        return self.to_display_string()


def _to_decimal(value: Numeric) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount("Amount cannot be a boolean")
    try:
        if isinstance(value, float):
            return Decimal(repr(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(f"Cannot convert '{value}' to an amount")
