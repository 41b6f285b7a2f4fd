class RealVecError(Exception):
    """Base exception for py-realvec library."""
    pass


class RealVecTypeError(RealVecError, TypeError):
    """Raised for operands that cannot be treated as real numbers."""
    pass


class RealVecIndexError(RealVecError, IndexError):
    """Raised for invalid indexing operations."""
    pass


class DimensionMismatchError(RealVecError, ValueError):
    """Raised when two vectors of different length meet in a binary operation."""

    def __init__(self, expected, actual, operation=None):
        self.expected = expected
        self.actual = actual
        self.operation = operation
        where = f" in {operation}" if operation else ""
        super().__init__(
            f"Vector length mismatch{where}: expected {expected}, got {actual}"
        )


class DimensionalityError(RealVecError, ValueError):
    """Raised when an operation is only defined for a fixed dimension."""

    def __init__(self, expected, actual, operation=None):
        self.expected = expected
        self.actual = actual
        self.operation = operation
        what = operation or "operation"
        super().__init__(
            f"{what} is only defined for {expected}-dimensional vectors, got {actual}"
        )


class ZeroDenominatorError(RealVecError, ZeroDivisionError):
    """Raised when an operation would produce a zero denominator."""
    pass


class FractionOverflowError(RealVecError, OverflowError):
    """Raised when a value leaves the representable range."""
    pass


class RealDomainError(RealVecError, ValueError):
    """Raised for mathematically undefined requests (e.g. sqrt of a negative)."""
    pass


class LossyConversionWarning(UserWarning):
    """Issued when a conversion or fraction-side transform discards information."""
    pass
