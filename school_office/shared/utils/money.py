from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

ZERO = Decimal("0.00")

# 13 integer digits and 2 decimals; request schemas use the same bound
MAX_DIGITS = 15
MAX_AMOUNT = Decimal("9999999999999.99")


def round_money(value: Union[Decimal, float, int, str]) -> Decimal:
    """
    Round monetary value to 2 decimal places using ROUND_HALF_UP.

    Examples:
        >>> round_money(10.125)
        Decimal('10.13')
        >>> round_money("15000")
        Decimal('15000.00')
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if value < 0:
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_DOWN)
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_money(value: Union[Decimal, float, int, str]) -> Decimal:
    """
    Parse and round an amount coming from outside.

    Raises ValueError for text that is not a number, NaN, infinities and
    amounts whose magnitude exceeds ``MAX_AMOUNT``.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount exceeds the maximum of {MAX_AMOUNT}")
    return round_money(amount)


def sum_money(values: Iterable[Union[Decimal, float, int, str]]) -> Decimal:
    """Sum amounts and round the result once."""
    return round_money(sum((round_money(v) for v in values), ZERO))
