"""Currency amount helpers.

Amounts are Decimals with two places; all arithmetic stays in Decimal.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from fintrack.domain.errors import ValidationError, non_positive_amount

CENT = Decimal("0.01")


def to_money(amount: Decimal | int | str) -> Decimal:
    """Convert an amount to a Decimal rounded half-up to cents.

    Raises:
        ValidationError: If the amount is not a number
    """
    try:
        money = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount: '{amount}'")
    if not money.is_finite():
        raise ValidationError(f"Invalid amount: '{amount}'")
    return money


def validate_amount(amount: Decimal | int | str) -> Decimal:
    """Return the amount in cents, rejecting zero and negative values."""
    money = to_money(amount)
    if money <= 0:
        raise ValidationError(non_positive_amount(amount))
    return money


def split_amount(amount: Decimal, parts: int) -> list[Decimal]:
    """Split an amount into equal parts that sum to it exactly.

    Uses largest-remainder allocation in cents: leftover cents go to the
    first parts, one each.
    """
    cents = int(to_money(amount) / CENT)
    base, remainder = divmod(cents, parts)
    return [(Decimal(base + (1 if index < remainder else 0)) * CENT).quantize(CENT) for index in range(parts)]


def average(total: Decimal, count: int) -> Decimal:
    """Average of a total over count items, rounded half-up to cents. Zero for no items."""
    if count == 0:
        return Decimal("0.00")
    return (total / count).quantize(CENT, rounding=ROUND_HALF_UP)
