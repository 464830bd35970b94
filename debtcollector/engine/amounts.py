"""
debtcollector.engine.amounts — Amount Normalization & Display
==============================================================

Two kinds of numbers flow through the ledger:

* **Ledger math** — values that get stored or added to stored values.  These
  go through :func:`normalize_amount`: clamped to ±100,000, rounded to
  cents, sign preserved.
* **Aggregates** — sums coming back from the database.  These go through
  :func:`quantize_amount`: rounded to cents, never clamped, so a server
  with more than 100k of debt still reports the real figure.

Strings for humans come from :func:`format_for_display` and nowhere else.
Everything is :class:`~decimal.Decimal`; floats are converted via ``str``
so ``0.1`` stays ``0.10`` and not ``0.1000000000000000055…``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from debtcollector.engine.errors import InvalidAmountError

__all__ = [
    "AMOUNT_LIMIT",
    "CENT",
    "ZERO",
    "format_for_display",
    "normalize_amount",
    "quantize_amount",
    "to_decimal",
]

AMOUNT_LIMIT = Decimal("100000")
CENT = Decimal("0.01")
ZERO = Decimal("0.00")

AmountLike = Decimal | int | float | str | None


def to_decimal(value: AmountLike) -> Decimal:
    """Coerce *value* to :class:`Decimal`.

    ``None`` is treated as zero.  NaN, booleans, unparsable strings and
    non-numeric types raise :class:`InvalidAmountError`.  Infinities pass
    through; callers decide whether to clamp them.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise InvalidAmountError(f"Not an amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", ""))
        except InvalidOperation as exc:
            raise InvalidAmountError(f"Not an amount: {value!r}") from exc
    else:
        raise InvalidAmountError(f"Not an amount: {value!r}")

    if result.is_nan():
        raise InvalidAmountError("Amount is NaN")
    return result


def _cents(value: Decimal) -> Decimal:
    result = value.quantize(CENT, rounding=ROUND_HALF_UP)
    return result if result else ZERO  # no "-0.00"


def quantize_amount(value: AmountLike) -> Decimal:
    """Round to cents (half-up), sign preserved, no clamping."""
    result = to_decimal(value)
    if result.is_infinite():
        raise InvalidAmountError("Amount is infinite")
    return _cents(result)


def normalize_amount(value: AmountLike) -> Decimal:
    """``round(clamp(value, -100000, 100000), 2)`` — the ledger-math contract.

    >>> normalize_amount(25.505)
    Decimal('25.51')
    >>> normalize_amount(-250000)
    Decimal('-100000.00')
    >>> normalize_amount(None)
    Decimal('0.00')
    """
    result = to_decimal(value)
    if result > AMOUNT_LIMIT:
        result = AMOUNT_LIMIT
    elif result < -AMOUNT_LIMIT:
        result = -AMOUNT_LIMIT
    return _cents(result)


def format_for_display(value: AmountLike, *, signed: bool = True) -> str:
    """Render an amount with two decimals and thousands separators.

    ``signed=False`` drops the sign, for sentences that already say which
    direction the money moves ("paid 5.00").
    """
    amount = quantize_amount(value)
    if not signed:
        amount = abs(amount)
    return f"{amount:,.2f}"
