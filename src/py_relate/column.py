from .errors import RelateIndexError, RelateTypeError, RelateValueError
from .typing import DataType, infer_dtype, is_missing


class Column():
	""" Immutable named sequence of values sharing one dtype """
	_dtype = None
	_underlying = ()
	_name = None

	def __init__(self, values=(), name=None, dtype=None):
		if isinstance(values, Column):
			if name is None:
				name = values._name
			if dtype is None:
				dtype = values._dtype
			values = values._underlying
		elif isinstance(values, (str, bytes, bytearray)) or not hasattr(values, '__iter__'):
			raise RelateTypeError(
				f"Column values must be an iterable of scalars, got {type(values).__name__}"
			)

		if name is not None and not isinstance(name, str):
			raise RelateTypeError(f"Column name must be a string, got {type(name).__name__}")

		self._underlying = tuple(values)
		self._name = name

		if dtype is None:
			dtype = infer_dtype(self._underlying)
		elif not isinstance(dtype, DataType):
			dtype = DataType(dtype, nullable=any(is_missing(v) for v in self._underlying))
		self._dtype = dtype

	@property
	def name(self):
		return self._name

	def schema(self):
		"""Get the DataType schema of this column."""
		return self._dtype

	def copy(self, new_values=None, name=...):
		# Sentinel (...) distinguishes "keep the name" from name=None (clear it)
		use_name = self._name if name is ... else name
		if new_values is None:
			return Column(self._underlying, name=use_name, dtype=self._dtype)
		return Column(new_values, name=use_name)

	def rename(self, new_name):
		"""Return a copy of this column under a new name"""
		return self.copy(name=new_name)

	def take(self, indices):
		"""
		Gather values by position. A None index yields a missing value,
		which is how unmatched join rows are filled.
		"""
		indices = list(indices)
		data = self._underlying
		values = tuple(None if i is None else data[i] for i in indices)
		dtype = self._dtype
		if any(i is None for i in indices):
			dtype = dtype.with_nullable(True)
		elif dtype.nullable and not any(is_missing(v) for v in values):
			dtype = dtype.with_nullable(False)
		return Column(values, name=self._name, dtype=dtype)

	def isna(self):
		"""
		Return boolean mask of missing values (None or NaN).

		Examples
		--------
		>>> Column([1, None, 3]).isna().to_list()
		[False, True, False]
		"""
		return Column(tuple(is_missing(v) for v in self._underlying), dtype=DataType(bool))

	def fillna(self, value):
		out = tuple(value if is_missing(x) else x for x in self._underlying)
		return Column(out, name=self._name)

	def to_list(self):
		return list(self._underlying)

	def __iter__(self):
		""" iterate over the underlying tuple """
		return iter(self._underlying)

	def __len__(self):
		""" length of the underlying tuple """
		return len(self._underlying)

	def __contains__(self, value):
		return value in self._underlying

	def __getitem__(self, key):
		""" Get item(s) from self. Behavior varies by input type:
			# int: a single value
			# slice: a Column over the sliced range
			# list of bool (same length): mask, keep values where True
			# list of int: positional gather
		"""
		if isinstance(key, bool):
			raise RelateTypeError("Column indices must be int, slice or list, not bool")
		if isinstance(key, int):
			try:
				return self._underlying[key]
			except IndexError:
				raise RelateIndexError(
					f"Index {key} out of range for column of length {len(self)}"
				) from None
		if isinstance(key, slice):
			return Column(self._underlying[key], name=self._name)
		if isinstance(key, (list, tuple, Column)):
			key = list(key)
			if key and all(isinstance(e, bool) for e in key):
				if len(key) != len(self):
					raise RelateValueError(
						f"Boolean mask has length {len(key)}, but column has {len(self)} values"
					)
				return Column(
					tuple(v for v, keep in zip(self._underlying, key) if keep),
					name=self._name,
				)
			if all(isinstance(e, int) and not isinstance(e, bool) for e in key):
				return self.take(key)
		raise RelateTypeError(f"Invalid column index type: {type(key).__name__}")

	def __eq__(self, other):
		if not isinstance(other, Column):
			return NotImplemented
		return (self._name == other._name
			and len(self) == len(other)
			and all(_same_value(a, b) for a, b in zip(self._underlying, other._underlying)))

	__hash__ = None

	def __repr__(self):
		from .display import _printr
		return _printr(self)


def _same_value(a, b):
	if is_missing(a) and is_missing(b):
		return True
	return a == b
