import os
import sys
import warnings


_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


def _warn(message, category=UserWarning):
	"""
	warnings.warn attributed to the first caller outside py_relate, whether
	the operation was reached as a function or through a Table method.
	"""
	level = 2
	frame = sys._getframe(1)
	while frame is not None and os.path.abspath(frame.f_code.co_filename).startswith(_PACKAGE_DIR):
		frame = frame.f_back
		level += 1
	warnings.warn(message, category, stacklevel=level)


class RelateError(Exception):
	"""Base exception for py-relate library."""
	pass


class RelateKeyError(RelateError, KeyError):
	"""Raised when a column/key is missing."""
	pass


class RelateTypeError(RelateError, TypeError):
	"""Raised for invalid types in API calls."""
	pass


class RelateValueError(RelateError, ValueError):
	"""Raised for invalid values or mismatched lengths."""
	pass


class RelateIndexError(RelateError, IndexError):
	"""Raised for invalid indexing operations."""
	pass


class AmbiguousKeyError(RelateValueError):
	"""Raised when join keys are not given and cannot be inferred."""
	pass


class RowCountMismatchError(RelateValueError):
	"""Raised when tables bound side by side have different row counts."""
	pass


class UnmatchedAestheticError(RelateKeyError):
	"""Raised when an aesthetic maps to a column the table does not have."""
	pass
