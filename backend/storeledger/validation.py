from __future__ import annotations

from decimal import Decimal

from .money import round_money, to_decimal


class LedgerError(ValueError):
    """
    Base for every rejection the ledger reports as data.

    Services raise these; LedgerStore converts them into failed Results.
    `kind` is the class name and is what callers branch on.
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(LedgerError):
    """400-level input problem (blank or malformed field)."""


class DuplicateError(LedgerError):
    """Case-insensitive name collision."""


class InvalidAmountError(ValidationError):
    """Price or value that must be positive is not."""


class NegativeQuantityError(ValidationError):
    pass


class NotFoundError(LedgerError):
    pass


class AlreadyPaidError(LedgerError):
    pass


# Kits

class EmptyCompositionError(ValidationError):
    pass


class InvalidComponentError(ValidationError):
    pass


# Sales

class EmptyOrderError(ValidationError):
    pass


class InvalidQuantityError(ValidationError):
    pass


class UnknownProductError(LedgerError):
    pass


class InsufficientStockError(LedgerError):
    pass


# Installments

class MissingInstallmentConfigError(ValidationError):
    pass


class InvalidInstallmentCountError(ValidationError):
    pass


class DownPaymentExceedsTotalError(ValidationError):
    pass


class MissingDueDateError(ValidationError):
    pass


class InvalidDateError(ValidationError):
    pass


class InvalidDueDayError(ValidationError):
    pass


# Purchase orders

class NoItemsSelectedError(ValidationError):
    pass


def require_text(value, message: str) -> str:
    """Strip and return value; blank or missing raises ValidationError."""
    if value is None:
        raise ValidationError(message)
    text = str(value).strip()
    if not text:
        raise ValidationError(message)
    return text


def coerce_amount(value, field: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError:
        raise InvalidAmountError(f"{field} must be a number")


def require_positive_amount(value, message: str) -> Decimal:
    """Amount rounded to the cent; anything that rounds to 0.00 or below is rejected."""
    amount = round_money(coerce_amount(value, "amount"))
    if amount <= 0:
        raise InvalidAmountError(message)
    return amount


def coerce_int(value, field: str, error_cls=ValidationError) -> int:
    # Reject bools and floats explicitly (True is an int, 2.5 is not a quantity)
    if isinstance(value, bool):
        raise error_cls(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lstrip("-").isdigit():
            return int(stripped)
    raise error_cls(f"{field} must be an integer")
