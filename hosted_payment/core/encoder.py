"""Canonical encoding of hosted payments into ordered query pairs."""

from decimal import Decimal
from typing import Iterable
from urllib.parse import urlencode

from ..types import HostedPayment, InvalidInputError, PaymentField

Pair = tuple[str, str]

TRUE = "true"
FALSE = "false"


def format_value(value) -> str:
    """Render a scalar field value as it appears on the wire.

    Booleans become ``true``/``false``. Numbers are written in plain decimal
    notation without exponent or grouping; integral floats drop their
    fractional part (``20.0`` -> ``"20"``).
    """
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        number = Decimal(repr(value)) if isinstance(value, float) else value
        if not number.is_finite():
            raise InvalidInputError(f"Cannot encode non-finite number {value!r}")
        text = format(number, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return str(value)


def parse_flag(field: PaymentField, value: str) -> bool:
    """Inverse of format_value for boolean display flags."""
    if value == TRUE:
        return True
    if value == FALSE:
        return False
    raise InvalidInputError(
        f"Field '{field.value}' expects '{TRUE}' or '{FALSE}', {value!r} given"
    )


def schema_pairs(payment: HostedPayment) -> list[Pair]:
    """Set schema fields in declaration order; unset fields are skipped."""
    pairs = []
    for field in PaymentField:
        value = payment.get(field)
        if value is not None:
            pairs.append((field.value, format_value(value)))
    return pairs


def custom_pairs(payment: HostedPayment) -> list[Pair]:
    # Sorted so the query is reproducible regardless of insertion order
    return [(key, payment.custom[key]) for key in sorted(payment.custom)]


def canonical_pairs(payment: HostedPayment) -> list[Pair]:
    """Schema pairs followed by custom pairs, the transport order."""
    return schema_pairs(payment) + custom_pairs(payment)


def encode_query(pairs: Iterable[Pair]) -> str:
    """Form-urlencode pairs (space as ``+``), keeping their order."""
    return urlencode(list(pairs))
