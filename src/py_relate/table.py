from .column import Column
from .naming import _sanitize_user_name, _uniquify, _system_name
from .errors import RelateKeyError, RelateValueError, RelateTypeError, RelateIndexError


def _missing_col_error(name, context="Table"):
	return RelateKeyError(f"Column '{name}' not found in {context}")


class _RowView:
	"""Lightweight row view for iterating over table rows with attribute access."""
	__slots__ = ('_cols', '_column_map', '_index')

	def __init__(self, table, index):
		# Direct handles to the column tuples
		self._cols = [col._underlying for col in table._underlying]
		self._column_map = table._column_map
		self._index = index

	def set_index(self, index):
		"""Reuse this row view for a different index (avoids allocation during iteration)."""
		self._index = index
		return self

	def __getattr__(self, attr):
		"""Access column values by sanitized attribute name."""
		col_idx = self._column_map.get(attr.lower())
		if col_idx is None:
			raise AttributeError(f"Row has no attribute '{attr}'")
		return self._cols[col_idx][self._index]

	def __getitem__(self, key):
		"""Access column values by index or name."""
		try:
			return self._cols[key][self._index]
		except TypeError:
			if isinstance(key, str):
				return getattr(self, key)
			raise TypeError(f"Row indices must be int or str, not {type(key).__name__}")

	def __iter__(self):
		idx = self._index
		for col in self._cols:
			yield col[idx]

	def __len__(self):
		return len(self._cols)

	def as_tuple(self):
		return tuple(self)

	def __repr__(self):
		idx = self._index
		values = [repr(col[idx]) for col in self._cols]
		return f"Row({idx}: {', '.join(values)})"


class Table():
	""" Uniquely named columns of the same length """
	_underlying = ()
	_length = 0

	def __init__(self, initial=None):
		"""
		Build a table from a dict {name: values}, a list of Columns, or
		another Table. Columns without a name get the system name col{idx}_.
		"""
		if initial is None:
			initial = ()
		if isinstance(initial, Table):
			columns = initial._underlying
		elif isinstance(initial, dict):
			columns = [Column(values, name=str(name)) for name, values in initial.items()]
		elif isinstance(initial, (list, tuple)):
			columns = []
			for idx, col in enumerate(initial):
				if not isinstance(col, Column):
					raise RelateTypeError(
						f"Table columns must be Column objects, got {type(col).__name__} at position {idx}"
					)
				columns.append(col)
		else:
			raise RelateTypeError(
				f"Cannot build a Table from {type(initial).__name__}; pass a dict or a list of Columns"
			)

		named = []
		seen = set()
		for idx, col in enumerate(columns):
			if col._name is None:
				col = col.rename(_system_name(idx))
			if col._name in seen:
				raise RelateValueError(f"Duplicate column name '{col._name}'")
			seen.add(col._name)
			named.append(col)

		self._set_columns(named)

	def _set_columns(self, columns, length=None):
		if length is None:
			length = len(columns[0]) if columns else 0
		for col in columns:
			if len(col) != length:
				raise RelateValueError(
					f"Column '{col._name}' has length {len(col)}, but table has {length} rows"
				)
		self._underlying = tuple(columns)
		self._length = length
		self._index = {col._name: idx for idx, col in enumerate(self._underlying)}
		# Build column map once for fast row iteration
		self._column_map = self._build_column_map()

	@classmethod
	def _from_columns(cls, columns, length=None):
		"""Wrap already-validated, uniquely named columns without copying."""
		table = cls.__new__(cls)
		table._set_columns(list(columns), length)
		return table

	@classmethod
	def from_records(cls, records, columns=None):
		"""
		Build a table from an iterable of dicts (one per row).

		Column order follows ``columns`` if given, else first-seen key order.
		Keys absent from a record are filled with None.
		"""
		records = list(records)
		if columns is None:
			columns = []
			seen = set()
			for rec in records:
				if not isinstance(rec, dict):
					raise RelateTypeError(f"Records must be dicts, got {type(rec).__name__}")
				for key in rec:
					if key not in seen:
						seen.add(key)
						columns.append(key)
		return cls({name: [rec.get(name) for rec in records] for name in columns})

	def _build_column_map(self):
		"""Build mapping from sanitized column names to column indices."""
		column_map = {}
		seen = set()
		for idx, col in enumerate(self._underlying):
			base = _sanitize_user_name(col._name)
			if base is None:
				sanitized = _system_name(idx)
			else:
				sanitized = _uniquify(base, seen)
				seen.add(sanitized)
			column_map[sanitized] = idx
		return column_map

	def _column_index(self, name, context="Table"):
		"""Exact name first, then the sanitized (case-insensitive) spelling."""
		if not isinstance(name, str):
			raise RelateTypeError(f"Column names must be strings, got {type(name).__name__}")
		idx = self._index.get(name)
		if idx is None:
			idx = self._column_map.get(name.lower())
		if idx is None:
			raise _missing_col_error(name, context)
		return idx

	# ------------------------------------------------------------------
	# Shape and introspection
	# ------------------------------------------------------------------

	def __len__(self):
		return self._length

	@property
	def nrows(self):
		return self._length

	@property
	def ncols(self):
		return len(self._underlying)

	@property
	def shape(self):
		return (self._length, len(self._underlying))

	def column_names(self):
		return [col._name for col in self._underlying]

	def columns(self):
		return self._underlying

	def schema(self):
		return {col._name: col._dtype for col in self._underlying}

	def __contains__(self, name):
		return name in self._index

	def __dir__(self):
		"""Return list of available attributes including sanitized column names."""
		base_attrs = object.__dir__(self)
		return sorted(set(base_attrs + list(self._column_map.keys())))

	def __getattr__(self, attr):
		"""Access columns by sanitized attribute name using pre-computed column map."""
		# Guard against lookups before _set_columns has run
		if attr.startswith('_'):
			raise AttributeError(attr)
		col_idx = self._column_map.get(attr.lower())
		if col_idx is not None:
			return self._underlying[col_idx]
		raise AttributeError(f"{self.__class__.__name__!s} object has no attribute '{attr}'")

	def __getitem__(self, key):
		""" Behavior varies by input type:
			# str: the named Column
			# tuple/list of str: a Table of those columns
			# int: row as a tuple
			# slice, list of int, list of bool: a Table of those rows
		"""
		if isinstance(key, str):
			return self._underlying[self._column_index(key)]

		if isinstance(key, (tuple, list)) and key and all(isinstance(k, str) for k in key):
			return self.select(*key)

		if isinstance(key, int) and not isinstance(key, bool):
			if not -self._length <= key < self._length:
				raise RelateIndexError(f"Row {key} out of range for table with {self._length} rows")
			return tuple(col._underlying[key] for col in self._underlying)

		if isinstance(key, slice):
			return self.take(range(self._length)[key])

		if isinstance(key, (list, tuple, Column)):
			key = list(key)
			if key and all(isinstance(e, bool) for e in key):
				if len(key) != self._length:
					raise RelateValueError(
						f"Boolean mask has length {len(key)}, but table has {self._length} rows"
					)
				return self.take(i for i, keep in enumerate(key) if keep)
			if all(isinstance(e, int) and not isinstance(e, bool) for e in key):
				return self.take(key)

		raise RelateTypeError(f"Invalid table index type: {type(key).__name__}")

	def __iter__(self):
		"""Iterate over rows using a reusable _RowView for memory efficiency."""
		row_view = _RowView(self, 0)
		for i in range(len(self)):
			row_view.set_index(i)
			yield row_view

	# ------------------------------------------------------------------
	# Conversion
	# ------------------------------------------------------------------

	def rows(self):
		"""All rows as a list of tuples."""
		if not self._underlying:
			return [()] * self._length
		return list(zip(*(col._underlying for col in self._underlying)))

	def to_dicts(self):
		names = self.column_names()
		return [dict(zip(names, row)) for row in self.rows()]

	def to_columns(self):
		return {col._name: list(col._underlying) for col in self._underlying}

	# ------------------------------------------------------------------
	# Derived tables (inputs are never modified)
	# ------------------------------------------------------------------

	def select(self, *names):
		"""Table of the named columns, in the order given"""
		if len(names) == 1 and isinstance(names[0], (list, tuple)):
			names = tuple(names[0])
		cols = [self._underlying[self._column_index(n)] for n in names]
		seen = set()
		for col in cols:
			if col._name in seen:
				raise RelateValueError(f"Column '{col._name}' selected more than once")
			seen.add(col._name)
		return Table._from_columns(cols, self._length)

	def rename(self, mapping=None, **kwargs):
		"""
		Return a table with columns renamed.

		Accepts {old: new} and/or old=new keyword pairs. Every old name must
		exist and the resulting names must remain unique.
		"""
		mapping = dict(mapping or {}, **kwargs)
		new_names = self.column_names()
		for old, new in mapping.items():
			new_names[self._column_index(old)] = new
		if len(set(new_names)) != len(new_names):
			raise RelateValueError(f"Renaming would produce duplicate column names: {new_names}")
		cols = [col.rename(n) for col, n in zip(self._underlying, new_names)]
		return Table._from_columns(cols, self._length)

	def take(self, indices):
		"""Gather rows by position; a None position yields an all-missing row."""
		indices = list(indices)
		return Table._from_columns([col.take(indices) for col in self._underlying], len(indices))

	def head(self, n=5):
		return self.take(range(min(n, self._length)))

	def equals(self, other):
		"""Same column names in the same order and the same values row by row"""
		if not isinstance(other, Table):
			return False
		return (self.shape == other.shape
			and all(a == b for a, b in zip(self._underlying, other._underlying)))

	def __eq__(self, other):
		if not isinstance(other, Table):
			return NotImplemented
		return self.equals(other)

	__hash__ = None

	def __repr__(self):
		from .display import _printr
		return _printr(self)

	# ------------------------------------------------------------------
	# Relational combination (see joins.py / binds.py)
	# ------------------------------------------------------------------

	def inner_join(self, other, by=None, **kwargs):
		from .joins import inner_join
		return inner_join(self, other, by, **kwargs)

	def left_join(self, other, by=None, **kwargs):
		from .joins import left_join
		return left_join(self, other, by, **kwargs)

	def right_join(self, other, by=None, **kwargs):
		from .joins import right_join
		return right_join(self, other, by, **kwargs)

	def full_join(self, other, by=None, **kwargs):
		from .joins import full_join
		return full_join(self, other, by, **kwargs)

	def cross_join(self, other, **kwargs):
		from .joins import cross_join
		return cross_join(self, other, **kwargs)

	def semi_join(self, other, by=None, **kwargs):
		from .joins import semi_join
		return semi_join(self, other, by, **kwargs)

	def anti_join(self, other, by=None, **kwargs):
		from .joins import anti_join
		return anti_join(self, other, by, **kwargs)

	def bind_rows(self, *others, **kwargs):
		from .binds import bind_rows
		return bind_rows(self, *others, **kwargs)

	def bind_cols(self, *others):
		from .binds import bind_cols
		return bind_cols(self, *others)
