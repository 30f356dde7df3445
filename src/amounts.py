import re
from decimal import (
    Context,
    Decimal,
    DecimalException,
    Inexact,
    InvalidOperation,
    Overflow,
    DivisionByZero,
    Rounded,
    ROUND_HALF_EVEN,
)

from errors import AmountOverflowError, RecordParseError

Amount = Decimal

AMOUNT_PRECISION = 28
AMOUNT_SCALE = 4
AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)

ZERO = Decimal("0").quantize(AMOUNT_QUANTUM)

_NUMBER_LITERAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

# Parsing may round away digits beyond the scale, arithmetic must stay exact.
_PARSE_CONTEXT = Context(
    prec=AMOUNT_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, Overflow, DivisionByZero],
)
# Rounded is trapped too: dropping only trailing zeros signals Rounded without Inexact.
_ARITHMETIC_CONTEXT = Context(
    prec=AMOUNT_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, Overflow, DivisionByZero, Inexact, Rounded],
)


def parse_amount(text: str) -> Amount:
    """
    Parse a decimal literal into an Amount with AMOUNT_SCALE fractional digits.

    Raises RecordParseError for anything that is not a finite number and
    AmountOverflowError when the value does not fit the amount precision,
    including literals whose exponent is beyond what Decimal can hold.
    """
    literal = text.strip()
    try:
        value = Decimal(literal)
    except InvalidOperation:
        if _NUMBER_LITERAL.fullmatch(literal):
            raise AmountOverflowError(f"Amount {text!r} is out of the decimal range") from None
        raise RecordParseError(f"Invalid amount literal {text!r}") from None

    if not value.is_finite():
        raise RecordParseError(f"Amount must be a finite number, got {text!r}")

    try:
        return value.quantize(AMOUNT_QUANTUM, context=_PARSE_CONTEXT)
    except DecimalException as e:
        raise AmountOverflowError(f"Amount {text!r} exceeds {AMOUNT_PRECISION} significant digits") from e


def checked_add(left: Amount, right: Amount) -> Amount:
    try:
        return _ARITHMETIC_CONTEXT.add(left, right)
    except DecimalException as e:
        raise AmountOverflowError(f"Amount overflow computing {left} + {right}") from e


def checked_sub(left: Amount, right: Amount) -> Amount:
    try:
        return _ARITHMETIC_CONTEXT.subtract(left, right)
    except DecimalException as e:
        raise AmountOverflowError(f"Amount overflow computing {left} - {right}") from e


def format_amount(value: Amount) -> str:
    """Render an amount with exactly AMOUNT_SCALE fractional digits."""
    try:
        return f"{value.quantize(AMOUNT_QUANTUM, context=_PARSE_CONTEXT):f}"
    except DecimalException as e:
        raise AmountOverflowError(f"Amount {value} cannot be rendered with {AMOUNT_SCALE} fractional digits") from e
