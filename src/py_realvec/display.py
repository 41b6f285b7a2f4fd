"""Display and repr logic for RealNumber and RealVector."""

from __future__ import annotations
import decimal
from decimal import Decimal
from typing import List

from .errors import RealVecTypeError
from .typing import QUAD_CONTEXT


# Digits after the decimal point when no precision is given
DEFAULT_PRECISION = 6

# How many elements to show at each end before inserting "..."
MAX_PREVIEW = 5


def _check_precision(precision) -> int:
	if isinstance(precision, bool) or not isinstance(precision, int):
		raise RealVecTypeError(f"precision must be an int, not {type(precision).__name__}")
	if precision < 0:
		raise ValueError(f"precision must be non-negative, got {precision}")
	return precision


def _format_fraction(numerator: int, denominator: int) -> str:
	"""'<num>/<den>', sign carried by the components as stored."""
	return f"{numerator}/{denominator}"


def _format_fixed(value: Decimal, precision: int) -> str:
	"""Fixed-point with exactly `precision` digits, round-half-even."""
	spec = f".{_check_precision(precision)}f"
	with decimal.localcontext(QUAD_CONTEXT):
		return format(value, spec)


def _format_elements(vec, precision: int) -> List[str]:
	return [x.to_string(precision) for x in vec]


def _format_vector(vec, precision: int) -> str:
	"""'[e0, e1, ..., en-1]', each element in its own representation."""
	_check_precision(precision)
	return "[" + ", ".join(_format_elements(vec, precision)) + "]"


def _format_column(vec, max_preview: int = MAX_PREVIEW, precision: int = DEFAULT_PRECISION) -> List[str]:
	"""Returns a list of strings representing the vector, truncated for display."""
	n = len(vec)
	if n > max_preview * 2:
		preview = list(vec[:max_preview]) + ['...'] + list(vec[n - max_preview:])
	else:
		preview = list(vec)

	out = []
	for v in preview:
		if v == '...':
			out.append('...')
		else:
			out.append(v.to_string(precision))

	# Numbers align right
	max_len = max(len(s) for s in out) if out else 0
	return [s.rjust(max_len) for s in out]


def _footer(vec) -> str:
	"""Generate footer line based on length and kind."""
	if not len(vec):
		return "# empty"
	kind = vec.schema()
	return f"# {len(vec)} element vector <{kind.value}>"


def _printr(vec) -> str:
	"""Entry point used by RealVector.__repr__."""
	lines = _format_column(vec)
	lines.append("")
	lines.append(_footer(vec))
	return "\n".join(lines)
