"""
py-realvec: exact-or-approximate real numbers and the vectors built on them

A RealNumber is either an exact Fraction (64-bit numerator/denominator) or an
extended-precision Approximate. Arithmetic keeps fractions exact until an
approximate operand shows up, then the result is approximate.

Main classes:
    - RealNumber: common interface of the two representations
    - Fraction: exact rational variant
    - Approximate: 34-digit decimal float variant
    - RealVector: growable vector of RealNumbers with linear-algebra helpers

Zero external dependencies - pure Python stdlib only.
"""

from .realnum import RealNumber, Fraction, Approximate, coerce_real
from .vector import RealVector, DEFAULT_CAPACITY
from .typing import RealKind, QUAD_CONTEXT, INT64_MIN, INT64_MAX
from .display import DEFAULT_PRECISION
from .errors import (
	RealVecError,
	RealVecTypeError,
	RealVecIndexError,
	DimensionMismatchError,
	DimensionalityError,
	ZeroDenominatorError,
	FractionOverflowError,
	RealDomainError,
	LossyConversionWarning,
)

__version__ = "0.1.0"
__all__ = [
	"RealNumber",
	"Fraction",
	"Approximate",
	"RealVector",
	"RealKind",
	"coerce_real",
	"DEFAULT_CAPACITY",
	"DEFAULT_PRECISION",
	"QUAD_CONTEXT",
	"INT64_MIN",
	"INT64_MAX",
	"RealVecError",
	"RealVecTypeError",
	"RealVecIndexError",
	"DimensionMismatchError",
	"DimensionalityError",
	"ZeroDenominatorError",
	"FractionOverflowError",
	"RealDomainError",
	"LossyConversionWarning",
]
