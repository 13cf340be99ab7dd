# Overview: Decimal money helpers shared by the ledger services.

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    """
    Coerce int/float/str/Decimal to Decimal.

    Floats go through str() to avoid binary-float surprises (0.1 -> 0.1,
    not 0.1000000000000000055511151231257827).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    return result


def round_money(value) -> Decimal:
    """Round to the cent, half away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value) -> int:
    return int(round_money(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def split_installments(amount, count: int) -> list[Decimal]:
    """
    Split amount into `count` installments that sum to it exactly.

    Works in integer cents: every installment gets cents // count and the
    first cents % count installments get one extra cent.
    """
    if count < 1:
        raise ValueError("count must be >= 1")
    cents = to_cents(amount)
    base, remainder = divmod(cents, count)
    return [from_cents(base + (1 if index < remainder else 0)) for index in range(count)]


def format_money(value) -> str:
    return format(round_money(value), "0.2f")
