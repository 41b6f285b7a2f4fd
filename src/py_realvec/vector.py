import math
import sys
import fractions

from decimal import Decimal

from .display import DEFAULT_PRECISION
from .display import _format_vector
from .display import _printr
from .errors import DimensionalityError
from .errors import DimensionMismatchError
from .errors import RealVecIndexError
from .errors import RealVecTypeError
from .errors import ZeroDenominatorError
from .realnum import Approximate
from .realnum import RealNumber
from .realnum import coerce_real
from .typing import infer_schema

from typing import Any
from typing import Iterable

# Starting slot count; push doubles it whenever the vector is full
DEFAULT_CAPACITY = 16


def _check_count(value, what):
	if isinstance(value, bool) or not isinstance(value, int):
		raise RealVecTypeError(f"{what} must be an int, not {type(value).__name__}")
	if value < 0:
		raise ValueError(f"{what} must be non-negative, got {value}")
	return value


def _coerce_element(value: Any, exact: bool) -> RealNumber:
	"""
	Turn an input value into a vector element.

	Plain numbers become Approximate unless exact is set, in which case
	ints (and fractions.Fraction) stay exact.
	"""
	if isinstance(value, RealNumber):
		return value
	if exact or isinstance(value, fractions.Fraction):
		return coerce_real(value)
	if isinstance(value, bool):
		raise RealVecTypeError("bool is not a real number")
	if isinstance(value, (int, float, Decimal, str)):
		return Approximate(value)
	raise RealVecTypeError(f"Cannot store {type(value).__name__} in a RealVector")


# ============================================================
# Main backend
# ============================================================

class RealVector():
	""" Growable vector of RealNumbers """
	_data = None
	_size = 0

	def __init__(self, capacity=DEFAULT_CAPACITY):
		"""
		Create an empty vector with room for `capacity` elements.
		"""
		_check_count(capacity, "capacity")
		self._data = [None] * capacity
		self._size = 0

	@property
	def size(self):
		""" number of elements in use """
		return self._size

	@property
	def capacity(self):
		""" number of allocated slots """
		return len(self._data)

	def schema(self):
		"""Get the combined RealKind of the elements (None when empty)."""
		return infer_schema(self)

	def dim(self):
		return self._size

	#-----------------------------------------------------
	# Construction
	#-----------------------------------------------------

	@classmethod
	def with_capacity(cls, capacity):
		return cls(capacity)

	@classmethod
	def with_size(cls, size):
		""" create a vector of `size` zero fractions """
		_check_count(size, "size")
		vec = cls(size)
		zero = RealNumber.zero()
		for i in range(size):
			vec._data[i] = zero
		vec._size = size
		return vec

	@classmethod
	def zeros(cls, size):
		return cls.with_size(size)

	@classmethod
	def from_values(cls, values: Iterable[Any], exact: bool = False):
		"""
		Build a vector from an ordered sequence of values.

		Parameters
		----------
		values : Iterable
			RealNumbers or plain Python numbers
		exact : bool
			Keep ints as fractions instead of approximating them

		Examples
		--------
		>>> RealVector.from_values([1, 2, 3]).format(1)
		'[1.0, 2.0, 3.0]'
		>>> RealVector.from_values([1, 2], exact=True).format(1)
		'[1/1, 2/1]'
		"""
		elements = [_coerce_element(v, exact) for v in values]
		vec = cls(len(elements))
		for elem in elements:
			vec.push(elem)
		return vec

	@classmethod
	def _from_elements(cls, elements):
		""" wrap already-computed RealNumbers, capacity == size """
		vec = cls(len(elements))
		vec._data[:len(elements)] = elements
		vec._size = len(elements)
		return vec

	def push(self, value, exact=False):
		"""
		Append one element, doubling capacity first if the vector is full.

		Plain numbers are coerced the same way as in from_values.
		"""
		value = _coerce_element(value, exact)
		if self._size == len(self._data):
			grow_by = len(self._data) or DEFAULT_CAPACITY
			self._data.extend([None] * grow_by)
		self._data[self._size] = value
		self._size += 1

	def clone(self):
		""" independent copy; capacity is trimmed to size """
		return self._from_elements(list(self))

	#-----------------------------------------------------
	# Access
	#-----------------------------------------------------

	def __iter__(self):
		""" iterate over the elements in use """
		for i in range(self._size):
			yield self._data[i]

	def __len__(self):
		return self._size

	def __getitem__(self, key):
		""" Integer index returns a RealNumber; a slice returns a new RealVector """
		if isinstance(key, bool):
			raise RealVecTypeError('Vector indices must be integers or slices, not bool')
		if isinstance(key, int):
			n = self._size
			if key < 0:
				key += n
			if not (0 <= key < n):
				raise RealVecIndexError(f"Index {key} out of range for vector length {n}")
			return self._data[key]
		if isinstance(key, slice):
			return self._from_elements(self._data[:self._size][key])
		raise RealVecTypeError(f'Vector indices must be integers or slices, not {str(type(key))}')

	def __eq__(self, other):
		if not isinstance(other, RealVector):
			return NotImplemented
		if len(self) != len(other):
			return False
		return all(x == y for x, y in zip(self, other, strict=True))

	__hash__ = None

	def __repr__(self):
		return _printr(self)

	def __str__(self):
		return self.format(DEFAULT_PRECISION)

	def format(self, precision=DEFAULT_PRECISION):
		""" '[e0, e1, ...]' with each element in its own representation """
		return _format_vector(self, precision)

	def print(self, precision=DEFAULT_PRECISION, file=None):
		""" write format(precision) to `file` (stdout by default), no newline """
		stream = file if file is not None else sys.stdout
		stream.write(self.format(precision))

	""" Math operations """
	def _check_same_size(self, other, op_name):
		if not isinstance(other, RealVector):
			raise RealVecTypeError(f"{op_name} needs a RealVector, not {type(other).__name__}")
		if len(self) != len(other):
			raise DimensionMismatchError(len(self), len(other), op_name)

	def _elementwise_operation(self, other, op_func, op_name: str):
		"""Helper function to combine two equal-length vectors element by element."""
		self._check_same_size(other, op_name)
		return self._from_elements([op_func(x, y) for x, y in zip(self, other, strict=True)])

	def _scalar_operation(self, scalar, op_func):
		"""Helper function to apply one scalar to every element."""
		scalar = coerce_real(scalar)
		return self._from_elements([op_func(x, scalar) for x in self])

	def add(self, other):
		return self._elementwise_operation(other, RealNumber.add, 'add')

	def subtract(self, other):
		return self._elementwise_operation(other, RealNumber.subtract, 'subtract')

	def multiply(self, scalar):
		return self._scalar_operation(scalar, RealNumber.multiply)

	def divide(self, scalar):
		return self._scalar_operation(scalar, RealNumber.divide)

	def negate(self):
		return self._from_elements([x.negate() for x in self])

	def dot(self, other) -> RealNumber:
		"""
		Sum of pairwise products.

		The accumulator starts as an approximate zero, so the result is
		always Approximate, even for two all-fraction vectors.
		"""
		self._check_same_size(other, 'dot')
		result = Approximate(0)
		for x, y in zip(self, other, strict=True):
			result = result.add(x.multiply(y))
		return result

	def norm(self) -> RealNumber:
		return self.dot(self).square_root()

	def normalize(self):
		norm = self.norm()
		if norm.as_decimal().is_zero():
			raise ZeroDenominatorError("Cannot normalize a vector with zero norm")
		return self.divide(norm)

	def cross(self, other):
		""" 3D cross product via the determinant expansion """
		if not isinstance(other, RealVector):
			raise RealVecTypeError(f"cross needs a RealVector, not {type(other).__name__}")
		for vec in (self, other):
			if len(vec) != 3:
				raise DimensionalityError(3, len(vec), 'cross')
		a0, a1, a2 = self
		b0, b1, b2 = other
		return self._from_elements([
			a1.multiply(b2).subtract(a2.multiply(b1)),
			a2.multiply(b0).subtract(a0.multiply(b2)),
			a0.multiply(b1).subtract(a1.multiply(b0)),
		])

	def distance(self, other) -> RealNumber:
		return self.subtract(other).norm()

	def angle(self, other) -> Approximate:
		"""
		Angle between two vectors in radians.

		The arccosine is evaluated in double precision.
		"""
		self._check_same_size(other, 'angle')
		denom = self.norm().multiply(other.norm())
		if denom.as_decimal().is_zero():
			raise ZeroDenominatorError("Angle is undefined for a zero vector")
		cosine = float(self.dot(other).divide(denom))
		# Rounding can push |cos| a hair past 1
		cosine = max(-1.0, min(1.0, cosine))
		return Approximate(math.acos(cosine))

	def simplify(self):
		return self._from_elements([x.simplify() for x in self])

	def as_fractions(self):
		return self._from_elements([x.as_fraction() for x in self])

	def as_approximates(self):
		return self._from_elements([x.as_approximate() for x in self])

	def _scalar_or_not_implemented(self, other):
		if isinstance(other, RealVector):
			return None
		try:
			return coerce_real(other)
		except RealVecTypeError:
			return None

	def __add__(self, other):
		if not isinstance(other, RealVector):
			return NotImplemented
		return self.add(other)

	def __sub__(self, other):
		if not isinstance(other, RealVector):
			return NotImplemented
		return self.subtract(other)

	def __mul__(self, other):
		scalar = self._scalar_or_not_implemented(other)
		if scalar is None:
			return NotImplemented
		return self.multiply(scalar)

	def __rmul__(self, other):
		return self.__mul__(other)

	def __truediv__(self, other):
		scalar = self._scalar_or_not_implemented(other)
		if scalar is None:
			return NotImplemented
		return self.divide(scalar)

	def __matmul__(self, other):
		if not isinstance(other, RealVector):
			return NotImplemented
		return self.dot(other)

	def __neg__(self):
		return self.negate()
