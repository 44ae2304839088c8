"""
Aesthetic mappings: which table column drives which visual property.

Nothing here draws anything. A plotting layer receives the resolved
columns (or a ``layer_data`` table) and is free to render them.
"""

from collections.abc import Mapping

from .column import Column
from .errors import RelateTypeError, RowCountMismatchError, UnmatchedAestheticError
from .table import Table


# American spellings accepted on input
_ALIASES = {
	'color': 'colour',
	'fill_color': 'fill_colour',
	'outline_color': 'outline_colour',
}


def _standardise(name):
	return _ALIASES.get(name, name)


class Aesthetics(Mapping):
	"""Read-only mapping from aesthetic name to a column name or Column."""
	__slots__ = ('_mapping',)

	def __init__(self, mapping=None, **kwargs):
		merged = {}
		for name, value in dict(mapping or {}, **kwargs).items():
			if not isinstance(name, str):
				raise RelateTypeError(f"Aesthetic names must be strings, got {type(name).__name__}")
			if not isinstance(value, (str, Column)):
				raise RelateTypeError(
					f"Aesthetic '{name}' must map to a column name or a Column, got {type(value).__name__}"
				)
			merged[_standardise(name)] = value
		self._mapping = merged

	def __getitem__(self, key):
		return self._mapping[_standardise(key)]

	def __iter__(self):
		return iter(self._mapping)

	def __len__(self):
		return len(self._mapping)

	def __or__(self, other):
		"""Layer-level mappings override plot-level ones."""
		if not isinstance(other, Mapping):
			return NotImplemented
		return Aesthetics(dict(self._mapping, **{_standardise(k): v for k, v in other.items()}))

	def __repr__(self):
		inner = ', '.join(
			f"{k}={v!r}" if isinstance(v, str) else f"{k}=<Column {v.name!r}>"
			for k, v in self._mapping.items()
		)
		return f"aes({inner})"


def aes(x=None, y=None, **others):
	"""
	Build an aesthetic mapping.

	Examples
	--------
	>>> aes(x='year', y='sales', color='region')
	aes(x='year', y='sales', colour='region')
	"""
	mapping = {}
	if x is not None:
		mapping['x'] = x
	if y is not None:
		mapping['y'] = y
	mapping.update(others)
	return Aesthetics(mapping)


def resolve_aesthetics(table, mapping):
	"""
	Look up every mapped column in ``table``.

	Returns:
		dict {aesthetic: Column}

	Raises:
		UnmatchedAestheticError: a mapped column name is not in the table
		RowCountMismatchError: a Column value has the wrong length
	"""
	if not isinstance(table, Table):
		raise RelateTypeError(f"Expected a Table, got {type(table).__name__}")
	if not isinstance(mapping, Aesthetics):
		mapping = Aesthetics(mapping)

	resolved = {}
	for aesthetic, target in mapping.items():
		if isinstance(target, Column):
			if len(target) != len(table):
				raise RowCountMismatchError(
					f"Aesthetic '{aesthetic}' has {len(target)} values, but the table has {len(table)} rows"
				)
			resolved[aesthetic] = target
			continue
		try:
			resolved[aesthetic] = table[target]
		except KeyError:
			raise UnmatchedAestheticError(
				f"Aesthetic '{aesthetic}' maps to column '{target}', which is not in the table. "
				f"Available columns: {table.column_names()}"
			) from None
	return resolved


def layer_data(table, mapping):
	"""Table with one column per aesthetic, named after the aesthetic."""
	resolved = resolve_aesthetics(table, mapping)
	return Table._from_columns(
		[col.rename(aesthetic) for aesthetic, col in resolved.items()],
		len(table),
	)
