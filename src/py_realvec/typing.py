"""
Kind system for RealNumber / RealVector.

Pure metadata design:
  - RealKind tags which representation a RealNumber carries
  - The extended float is decimal.Decimal evaluated in QUAD_CONTEXT
  - Fraction components are plain ints kept inside the signed 64-bit range
  - Kind inference over a sequence follows the contagion rule
"""

from __future__ import annotations
import decimal
import enum
from decimal import Decimal
from typing import Any, Iterable, Optional

from .errors import FractionOverflowError
from .errors import RealVecTypeError


# binary128 carries 113 significand bits, i.e. 34 significant decimal digits
QUAD_DIGITS = 34

QUAD_CONTEXT = decimal.Context(
    prec=QUAD_DIGITS,
    rounding=decimal.ROUND_HALF_EVEN,
    Emin=-4931,
    Emax=4932,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class RealKind(enum.Enum):
    """
    Which representation a RealNumber carries.

    Examples
    --------
    >>> RealKind.FRACTION.promote_with(RealKind.APPROXIMATE)
    <approximate>
    """

    FRACTION = "fraction"
    APPROXIMATE = "approximate"

    def __repr__(self):
        return f"<{self.value}>"

    def promote_with(self, other: "RealKind") -> "RealKind":
        """
        Combine two kinds the way a binary operation does.

        Exactness survives only when both sides are fractions.
        """
        if self is RealKind.FRACTION and other is RealKind.FRACTION:
            return RealKind.FRACTION
        return RealKind.APPROXIMATE


def check_int64(value: int, what: str = "value") -> int:
    """
    Ensure an integer fits a signed 64-bit slot.

    Raises
    ------
    FractionOverflowError
        If value is outside [INT64_MIN, INT64_MAX]
    """
    if value < INT64_MIN or value > INT64_MAX:
        raise FractionOverflowError(
            f"Fraction {what} {value} does not fit in a signed 64-bit integer"
        )
    return value


def validate_component(value: Any, what: str = "component") -> int:
    """
    Validate a numerator/denominator before it is stored in a Fraction.

    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise RealVecTypeError(
            f"Fraction {what} must be an int, not {type(value).__name__}"
        )
    return check_int64(value, what)


def to_decimal(value: Any) -> Decimal:
    """
    Convert a plain Python number to an extended float in QUAD_CONTEXT.

    Floats are taken at their exact binary value, then rounded to 34 digits.
    """
    if isinstance(value, bool):
        raise RealVecTypeError("bool is not a real number")
    if isinstance(value, (int, float, str, Decimal)):
        try:
            result = QUAD_CONTEXT.create_decimal(value)
        except decimal.InvalidOperation:
            raise RealVecTypeError(f"Cannot read {value!r} as a real number") from None
        if not result.is_finite():
            raise RealVecTypeError(f"Approximate values must be finite, got {value!r}")
        return result
    raise RealVecTypeError(
        f"Cannot convert {type(value).__name__} to an approximate value"
    )


def infer_kind(value: Any) -> Optional[RealKind]:
    """
    Infer the RealKind of a single scalar.

    Returns None for None values.
    """
    if value is None:
        return None
    kind = getattr(value, "kind", None)
    if isinstance(kind, RealKind):
        return kind
    if isinstance(value, bool):
        raise RealVecTypeError("bool is not a real number")
    if isinstance(value, int):
        return RealKind.FRACTION
    if isinstance(value, (float, Decimal)):
        return RealKind.APPROXIMATE
    raise RealVecTypeError(f"Cannot infer a real kind for {type(value).__name__}")


def infer_schema(values: Iterable[Any]) -> Optional[RealKind]:
    """
    Infer the combined RealKind of a sequence of values.

    Parameters
    ----------
    values : Iterable[Any]
        RealNumbers (or plain numbers) to analyze

    Returns
    -------
    RealKind or None
        APPROXIMATE if any value is approximate, FRACTION if all are
        fractions, None for an empty iterable

    Examples
    --------
    >>> infer_schema([])
    >>> infer_schema([1, 2])
    <fraction>
    >>> infer_schema([1, 2.5])
    <approximate>
    """
    kind: Optional[RealKind] = None
    for v in values:
        k = infer_kind(v)
        if k is None:
            continue
        kind = k if kind is None else kind.promote_with(k)
    return kind
