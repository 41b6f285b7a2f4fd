"""
RealNumber: a dual-representation real number.

Two variants share one interface:
  - Fraction(numerator, denominator): exact rational, 64-bit components
  - Approximate(value): extended-precision float (Decimal in QUAD_CONTEXT)

Binary operations follow the contagion rule: two fractions combine
exactly into a new (unreduced) fraction, anything else is computed in
extended precision and comes back Approximate.
"""

from __future__ import annotations
import decimal
import fractions
import math
import os
import sys
import warnings
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from .display import DEFAULT_PRECISION
from .display import _format_fixed
from .display import _format_fraction
from .errors import FractionOverflowError
from .errors import LossyConversionWarning
from .errors import RealDomainError
from .errors import RealVecTypeError
from .errors import ZeroDenominatorError
from .typing import INT64_MAX
from .typing import QUAD_CONTEXT
from .typing import QUAD_DIGITS
from .typing import RealKind
from .typing import check_int64
from .typing import to_decimal
from .typing import validate_component


# ============================================================
# Extended-precision helpers
# ============================================================

_ONE_THIRD = QUAD_CONTEXT.divide(1, 3)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _quad(op: Callable[..., Decimal], *operands: Decimal) -> Decimal:
    """Run a QUAD_CONTEXT operation, translating decimal signals."""
    try:
        result = op(*operands)
    except decimal.Overflow:
        raise FractionOverflowError("Result exceeds the extended float range") from None
    except decimal.DivisionByZero:
        raise ZeroDenominatorError("Division by zero") from None
    except decimal.InvalidOperation:
        raise RealDomainError(
            f"{getattr(op, '__name__', 'operation')} is undefined for "
            + ", ".join(str(x) for x in operands)
        ) from None
    if result.is_infinite():
        # 0 ** negative comes back as Infinity without a signal
        raise ZeroDenominatorError("Division by zero")
    return result


def _cbrt(x: Decimal) -> Decimal:
    """Real cube root; exact when x is a perfect cube."""
    if x.is_zero():
        return x
    magnitude = QUAD_CONTEXT.abs(x)
    root = QUAD_CONTEXT.power(magnitude, _ONE_THIRD)
    nearest = root.to_integral_value(rounding=decimal.ROUND_HALF_EVEN)
    if QUAD_CONTEXT.power(nearest, 3) == magnitude:
        root = nearest
    return root.copy_sign(x)


def _snap(value: Decimal) -> Decimal:
    """Round to the nearest integer when only last-digit noise separates them."""
    nearest = value.to_integral_value(rounding=decimal.ROUND_HALF_EVEN)
    tolerance = QUAD_CONTEXT.abs(nearest).scaleb(-(QUAD_DIGITS - 2))
    if QUAD_CONTEXT.abs(QUAD_CONTEXT.subtract(value, nearest)) <= tolerance:
        return nearest
    return value


def _caller_stacklevel() -> int:
    """Stack level of the first frame outside this package, for warnings.warn."""
    frame = sys._getframe(1)
    level = 1
    while frame is not None and os.path.dirname(os.path.abspath(frame.f_code.co_filename)) == _PACKAGE_DIR:
        frame = frame.f_back
        level += 1
    return level


def _truncate(values, op_name: str) -> list:
    """
    Convert extended results to ints, truncating toward zero.

    Warns once if any component had a fractional part.
    """
    values = [_snap(v) for v in values]
    out = [int(v) for v in values]
    if any(i != v for i, v in zip(out, values)):
        warnings.warn(
            f"{op_name} on a fraction is applied to numerator and denominator "
            "separately; non-integral components were truncated",
            LossyConversionWarning,
            stacklevel=_caller_stacklevel(),
        )
    return out


def coerce_real(value: Any) -> "RealNumber":
    """
    Turn a Python number into a RealNumber.

    int and fractions.Fraction stay exact; float, Decimal and str become
    Approximate. RealNumbers pass through untouched.
    """
    if isinstance(value, RealNumber):
        return value
    if isinstance(value, bool):
        raise RealVecTypeError("bool is not a real number")
    if isinstance(value, int):
        return Fraction(value, 1)
    if isinstance(value, fractions.Fraction):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, (float, Decimal, str)):
        return Approximate(value)
    raise RealVecTypeError(f"Cannot use {type(value).__name__} as a real number")


# ============================================================
# Base
# ============================================================

class RealNumber:
    """Common interface of Fraction and Approximate. Values are immutable."""

    __slots__ = ()

    kind: RealKind

    @staticmethod
    def from_fraction(numerator: int, denominator: int = 1) -> "Fraction":
        return Fraction(numerator, denominator)

    @staticmethod
    def from_approximate(value) -> "Approximate":
        return Approximate(value)

    @staticmethod
    def zero() -> "Fraction":
        """The default value, 0/1."""
        return Fraction(0, 1)

    @property
    def is_fraction(self) -> bool:
        return self.kind is RealKind.FRACTION

    @property
    def is_approximate(self) -> bool:
        return self.kind is RealKind.APPROXIMATE

    def as_decimal(self) -> Decimal:
        """Value as an extended float (lossy for non-terminating fractions)."""
        raise NotImplementedError

    def __float__(self):
        return float(self.as_decimal())

    # ------------------------------------------------------------
    # Binary operations
    # ------------------------------------------------------------

    def _binary(self, other, exact, approx) -> "RealNumber":
        other = coerce_real(other)
        if isinstance(self, Fraction) and isinstance(other, Fraction):
            num, den = exact(self.numerator, self.denominator, other.numerator, other.denominator)
            return Fraction(num, den)
        return Approximate(_quad(approx, self.as_decimal(), other.as_decimal()))

    def add(self, other) -> "RealNumber":
        """(n1*d2 + n2*d1) / (d1*d2) for fractions."""
        return self._binary(
            other,
            lambda n1, d1, n2, d2: (n1 * d2 + n2 * d1, d1 * d2),
            QUAD_CONTEXT.add,
        )

    def subtract(self, other) -> "RealNumber":
        """(n1*d2 - n2*d1) / (d1*d2) for fractions."""
        return self._binary(
            other,
            lambda n1, d1, n2, d2: (n1 * d2 - n2 * d1, d1 * d2),
            QUAD_CONTEXT.subtract,
        )

    def multiply(self, other) -> "RealNumber":
        """(n1*n2) / (d1*d2) for fractions."""
        return self._binary(
            other,
            lambda n1, d1, n2, d2: (n1 * n2, d1 * d2),
            QUAD_CONTEXT.multiply,
        )

    def divide(self, other) -> "RealNumber":
        """
        (n1*d2) / (d1*n2) for fractions.

        Raises
        ------
        ZeroDenominatorError
            If other is zero, in either representation
        """
        other = coerce_real(other)
        if other.as_decimal().is_zero():
            raise ZeroDenominatorError(f"Cannot divide {self!r} by zero")
        return self._binary(
            other,
            lambda n1, d1, n2, d2: (n1 * d2, d1 * n2),
            QUAD_CONTEXT.divide,
        )

    def power(self, exponent) -> "RealNumber":
        """
        Raise to a power.

        A fraction raised to a fraction p/q raises numerator and denominator
        to p/q separately and truncates each result toward zero. This is
        exact for integer exponents and perfect roots only; anything else
        warns with LossyConversionWarning.
        """
        exponent = coerce_real(exponent)
        if isinstance(self, Fraction) and isinstance(exponent, Fraction):
            e = exponent.as_decimal()

            def power(c):
                return QUAD_CONTEXT.power(c, e)

            return self._componentwise(power, "power")
        return Approximate(_quad(QUAD_CONTEXT.power, self.as_decimal(), exponent.as_decimal()))

    def apply(self, other, op: Callable[["RealNumber", "RealNumber"], "RealNumber"]) -> "RealNumber":
        """Apply a binary operation, e.g. ``a.apply(b, RealNumber.add)``."""
        return op(self, coerce_real(other))

    # ------------------------------------------------------------
    # Unary operations
    # ------------------------------------------------------------

    def negate(self) -> "RealNumber":
        raise NotImplementedError

    def invert(self) -> "RealNumber":
        raise NotImplementedError

    def absolute_value(self) -> "RealNumber":
        raise NotImplementedError

    def square_root(self) -> "RealNumber":
        return self._transcendental(QUAD_CONTEXT.sqrt, "square_root")

    def cube_root(self) -> "RealNumber":
        return self._transcendental(_cbrt, "cube_root")

    def exponential(self) -> "RealNumber":
        return self._transcendental(QUAD_CONTEXT.exp, "exponential")

    def _transcendental(self, op, op_name) -> "RealNumber":
        if isinstance(self, Fraction):
            return self._componentwise(op, op_name)
        return Approximate(_quad(op, self.as_decimal()))

    # ------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------

    def as_fraction(self) -> "Fraction":
        raise NotImplementedError

    def as_approximate(self) -> "Approximate":
        return Approximate(self.as_decimal())

    def simplify(self) -> "RealNumber":
        return self

    # ------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------

    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        """Render in the number's own representation."""
        raise NotImplementedError

    def to_fraction_string(self) -> str:
        return self.as_fraction().to_string()

    def to_approximate_string(self, precision: int = DEFAULT_PRECISION) -> str:
        return self.as_approximate().to_string(precision)

    def __str__(self):
        return self.to_string()

    # ------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------

    def _operator(self, other, method, reflected=False):
        try:
            other = coerce_real(other)
        except RealVecTypeError:
            return NotImplemented
        if reflected:
            return method(other, self)
        return method(self, other)

    def __add__(self, other):
        return self._operator(other, RealNumber.add)

    def __radd__(self, other):
        return self._operator(other, RealNumber.add, reflected=True)

    def __sub__(self, other):
        return self._operator(other, RealNumber.subtract)

    def __rsub__(self, other):
        return self._operator(other, RealNumber.subtract, reflected=True)

    def __mul__(self, other):
        return self._operator(other, RealNumber.multiply)

    def __rmul__(self, other):
        return self._operator(other, RealNumber.multiply, reflected=True)

    def __truediv__(self, other):
        return self._operator(other, RealNumber.divide)

    def __rtruediv__(self, other):
        return self._operator(other, RealNumber.divide, reflected=True)

    def __pow__(self, other):
        return self._operator(other, RealNumber.power)

    def __rpow__(self, other):
        return self._operator(other, RealNumber.power, reflected=True)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.absolute_value()


# ============================================================
# Variants
# ============================================================

@dataclass(frozen=True)
class Fraction(RealNumber):
    """
    Exact rational number with signed 64-bit numerator and denominator.

    Not reduced automatically; call simplify().

    Examples
    --------
    >>> Fraction(1, 3) + Fraction(1, 3)
    Fraction(6, 9)
    >>> (Fraction(1, 3) + Fraction(1, 3)).simplify()
    Fraction(2, 3)
    """

    numerator: int
    denominator: int = 1

    kind = RealKind.FRACTION

    def __post_init__(self):
        validate_component(self.numerator, "numerator")
        validate_component(self.denominator, "denominator")
        if self.denominator == 0:
            raise ZeroDenominatorError(f"Fraction {self.numerator}/0 has a zero denominator")

    def __repr__(self):
        return f"Fraction({self.numerator}, {self.denominator})"

    def as_decimal(self) -> Decimal:
        return QUAD_CONTEXT.divide(self.numerator, self.denominator)

    def _componentwise(self, op, op_name) -> "Fraction":
        parts = [_quad(op, Decimal(c)) for c in (self.numerator, self.denominator)]
        num, den = _truncate(parts, op_name)
        if den == 0:
            raise ZeroDenominatorError(
                f"{op_name} of {self.numerator}/{self.denominator} truncates the denominator to zero"
            )
        return Fraction(num, den)

    def negate(self) -> "Fraction":
        return Fraction(-self.numerator, self.denominator)

    def invert(self) -> "Fraction":
        if self.numerator == 0:
            raise ZeroDenominatorError("Cannot invert a zero fraction")
        return Fraction(self.denominator, self.numerator)

    def absolute_value(self) -> "Fraction":
        return Fraction(abs(self.numerator), self.denominator)

    def as_fraction(self) -> "Fraction":
        return self

    def simplify(self) -> "Fraction":
        """
        Reduce to lowest terms with a positive denominator.

        Examples
        --------
        >>> Fraction(6, 9).simplify()
        Fraction(2, 3)
        >>> Fraction(2, -4).simplify()
        Fraction(-1, 2)
        """
        g = math.gcd(self.numerator, self.denominator)
        num, den = self.numerator // g, self.denominator // g
        if den < 0:
            num, den = -num, -den
        return Fraction(num, den)

    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        return _format_fraction(self.numerator, self.denominator)


@dataclass(frozen=True)
class Approximate(RealNumber):
    """
    Extended-precision approximation of a real number.

    The value is held as a Decimal rounded to QUAD_CONTEXT (34 digits).
    """

    value: Decimal

    kind = RealKind.APPROXIMATE

    def __post_init__(self):
        object.__setattr__(self, "value", to_decimal(self.value))

    def __repr__(self):
        return f"Approximate('{self.value}')"

    def as_decimal(self) -> Decimal:
        return self.value

    def negate(self) -> "Approximate":
        return Approximate(QUAD_CONTEXT.minus(self.value))

    def invert(self) -> "Approximate":
        if self.value.is_zero():
            raise ZeroDenominatorError("Cannot invert zero")
        return Approximate(_quad(QUAD_CONTEXT.divide, Decimal(1), self.value))

    def absolute_value(self) -> "Approximate":
        return Approximate(QUAD_CONTEXT.abs(self.value))

    def as_fraction(self) -> Fraction:
        """
        Closest fraction whose components fit in 64 bits.

        Warns with LossyConversionWarning when the value is not exactly
        representable that way.

        Raises
        ------
        FractionOverflowError
            If the magnitude exceeds INT64_MAX
        """
        exact = fractions.Fraction(self.value)
        if abs(exact) > INT64_MAX:
            raise FractionOverflowError(f"{self.value} is too large for a 64-bit fraction")
        # Bound the denominator so the numerator fits as well
        nearest = exact.limit_denominator(INT64_MAX // max(1, math.ceil(abs(exact))))
        check_int64(nearest.numerator, "numerator")
        if nearest != exact:
            warnings.warn(
                f"{self.value} has no exact 64-bit fraction; using {nearest}",
                LossyConversionWarning,
                stacklevel=_caller_stacklevel(),
            )
        return Fraction(nearest.numerator, nearest.denominator)

    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        return _format_fixed(self.value, precision)
