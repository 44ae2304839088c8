"""Stacking tables vertically (bind_rows) and side by side (bind_cols)."""

import logging

from .column import Column
from .errors import RelateTypeError, RelateValueError, RowCountMismatchError, _warn
from .naming import _uniquify
from .table import Table


log = logging.getLogger(__name__)


def _as_table(obj, position):
	if isinstance(obj, Table):
		return obj
	if isinstance(obj, dict):
		return Table(obj)
	raise RelateTypeError(
		f"Argument {position} must be a Table or a dict of columns, got {type(obj).__name__}"
	)


def _collect(tables):
	"""
	Normalize bind arguments into (label, Table) pairs.

	A single list/tuple argument is unpacked, a single dict of Tables
	supplies labels, None entries are dropped. Unlabelled inputs are
	labelled by their 1-based position.
	"""
	if len(tables) == 1:
		only = tables[0]
		if isinstance(only, (list, tuple)):
			tables = tuple(only)
		elif isinstance(only, dict) and only and all(isinstance(t, Table) for t in only.values()):
			return [(str(label), t) for label, t in only.items()]

	collected = []
	for position, obj in enumerate(tables, start=1):
		if obj is None:
			continue
		collected.append((str(position), _as_table(obj, position)))
	return collected


def bind_rows(*tables, id=None):
	"""
	Stack tables on top of each other.

	The result has the union of all input columns, in the order they are
	first seen. A table lacking a column contributes missing values for it.

	Args:
		*tables: Tables (or dicts of columns); a single list of them, or a
			single {label: Table} dict, is also accepted
		id: If given, name of a leading column recording which input each
			row came from (its label, or its 1-based position as a string)

	Returns:
		Table with sum(len(t) for t in tables) rows
	"""
	labelled = _collect(tables)
	inputs = [t for _, t in labelled]

	names = []
	seen = set()
	for t in inputs:
		for name in t.column_names():
			if name not in seen:
				seen.add(name)
				names.append(name)

	if id is not None:
		if not isinstance(id, str):
			raise RelateTypeError(f"id must be a column name, got {type(id).__name__}")
		if id in seen:
			raise RelateValueError(f"id column '{id}' clashes with an existing column")

	total = sum(len(t) for t in inputs)
	result_cols = []

	if id is not None:
		source = []
		for label, t in labelled:
			source.extend([label] * len(t))
		result_cols.append(Column(source, name=id))

	for name in names:
		values = []
		for t in inputs:
			if name in t:
				values.extend(t[name]._underlying)
			else:
				values.extend([None] * len(t))
		result_cols.append(Column(values, name=name))

	result = Table._from_columns(result_cols, total)
	log.debug('bind_rows: %d table(s) -> %d x %d', len(inputs), *result.shape)
	return result


def bind_cols(*tables):
	"""
	Place tables side by side.

	All inputs must have the same number of rows. An empty table (no rows
	and no columns) is ignored; a table with rows but no columns still
	takes part in the row-count check. Clashing column names are made
	unique (name__2, ...) and reported with a warning.

	Raises:
		RowCountMismatchError: if the inputs differ in row count
	"""
	inputs = [t for _, t in _collect(tables) if t.shape != (0, 0)]

	counts = [len(t) for t in inputs]
	if len(set(counts)) > 1:
		raise RowCountMismatchError(
			f"Can't bind columns of tables with different row counts: {counts}"
		)

	result_cols = []
	seen = set()
	renamed = []
	for t in inputs:
		for col in t.columns():
			name = _uniquify(col._name, seen)
			if name != col._name:
				renamed.append((col._name, name))
				col = col.rename(name)
			seen.add(name)
			result_cols.append(col)

	if renamed:
		_warn("New names: " + ", ".join(f"'{old}' -> '{new}'" for old, new in renamed))

	result = Table._from_columns(result_cols, counts[0] if counts else 0)
	log.debug('bind_cols: %d table(s) -> %d x %d', len(inputs), *result.shape)
	return result
