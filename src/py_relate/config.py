"""Library-wide defaults for joins, binds and display."""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Tuple

from .errors import RelateValueError


NA_MATCHES = ('never', 'na')


@dataclass(frozen=True)
class Options:
	"""
	Defaults consulted when an operation is not told otherwise.

	Attributes
	----------
	suffix : tuple of str
		Appended to clashing non-key column names in join results (left, right)
	na_matches : str
		'never' keeps missing keys from matching anything; 'na' lets a
		missing key match another missing key
	warn_many_to_many : bool
		Warn when a join without an ``expect`` finds a many-to-many match
	max_head_rows, max_head_cols : int
		How many leading/trailing rows and columns repr shows before '...'
	"""
	suffix: Tuple[str, str] = ('.x', '.y')
	na_matches: str = 'never'
	warn_many_to_many: bool = True
	max_head_rows: int = 5
	max_head_cols: int = 5

	def __post_init__(self):
		# normalise a list to a tuple
		object.__setattr__(self, 'suffix', _check_suffix(self.suffix))
		if not isinstance(self.warn_many_to_many, bool):
			raise RelateValueError(f"warn_many_to_many must be True or False, got {self.warn_many_to_many!r}")
		_check_na_matches(self.na_matches)
		for name in ('max_head_rows', 'max_head_cols'):
			value = getattr(self, name)
			if not isinstance(value, int) or isinstance(value, bool) or value < 1:
				raise RelateValueError(f"{name} must be a positive int, got {value!r}")


def _check_suffix(suffix):
	"""Returns suffix as a tuple; a list or tuple of two distinct strings is accepted."""
	if (not isinstance(suffix, (tuple, list)) or len(suffix) != 2
			or not all(isinstance(s, str) for s in suffix)):
		raise RelateValueError(f"suffix must be a pair of strings, got {suffix!r}")
	if suffix[0] == suffix[1]:
		raise RelateValueError(f"suffix entries must differ, got {suffix!r}")
	return tuple(suffix)


def _check_na_matches(na_matches):
	if na_matches not in NA_MATCHES:
		raise RelateValueError(
			f"Invalid na_matches={na_matches!r}. Must be one of {', '.join(map(repr, NA_MATCHES))}."
		)
	return na_matches


_current = Options()


def get_options() -> Options:
	return _current


def set_options(**changes) -> Options:
	"""Install new defaults. Returns the options that were in effect before."""
	global _current
	known = {f.name for f in fields(Options)}
	unknown = set(changes) - known
	if unknown:
		raise RelateValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")
	previous = _current
	_current = replace(_current, **changes)
	return previous


@contextmanager
def options(**changes):
	"""Temporarily override defaults inside a ``with`` block."""
	global _current
	previous = set_options(**changes)
	try:
		yield _current
	finally:
		_current = previous
