from decimal import Decimal
from typing import Iterable

from .dtos import CartLine, CartTotals

ZERO = Decimal("0")


def shipping_for(subtotal: Decimal, threshold: Decimal, flat_fee: Decimal) -> Decimal:
    """Flat fee below ``threshold``; free at or above it and for an empty cart."""
    if subtotal <= ZERO or subtotal >= threshold:
        return ZERO
    return flat_fee


def compute_totals(
    lines: Iterable[CartLine], threshold: Decimal, flat_fee: Decimal
) -> CartTotals:
    lines = list(lines)
    subtotal = sum((line.line_total for line in lines), ZERO)
    shipping = shipping_for(subtotal, threshold, flat_fee)
    return CartTotals(
        count=sum(line.quantity for line in lines),
        subtotal=subtotal,
        shipping=shipping,
        total=subtotal + shipping,
    )
