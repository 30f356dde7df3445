"""Exception hierarchy for the payments engine."""


class PaymentsError(Exception):
    """Base exception for all payments engine errors."""


class RecordParseError(PaymentsError):
    """Raised when an input row cannot be turned into a record. The row is skipped."""


class AmountOverflowError(PaymentsError):
    """Raised when an amount cannot be represented exactly. Aborts the run."""
