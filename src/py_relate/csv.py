"""Reading and writing Tables as delimited text."""

from __future__ import annotations
import csv
import logging
from pathlib import Path

from .column import Column
from .errors import RelateTypeError, RelateValueError
from .table import Table
from .typing import is_missing


log = logging.getLogger(__name__)


def _parse_int(text):
	# int() accepts '1_000' and surrounding spaces; csv cells should not
	if text.strip() != text or '_' in text:
		raise ValueError(text)
	return int(text)


# float() also reads these; in a csv they are text, missing cells come from na_values
_FLOAT_WORDS = frozenset({
	'nan', '+nan', '-nan',
	'inf', '+inf', '-inf',
	'infinity', '+infinity', '-infinity',
})


def _parse_float(text):
	if text.strip() != text or '_' in text or text.lower() in _FLOAT_WORDS:
		raise ValueError(text)
	return float(text)


def _infer_column(cells):
	"""Convert a column of strings (None = missing) to int, float or str values."""
	present = [c for c in cells if c is not None]
	if not present:
		return cells
	for parse in (_parse_int, _parse_float):
		try:
			parsed = {c: parse(c) for c in set(present)}
		except ValueError:
			continue
		return [None if c is None else parsed[c] for c in cells]
	return cells


def read_csv(path, delimiter=',', na_values=('', 'NA'), infer_types=True, encoding='utf-8'):
	"""
	Read a header-first delimited file into a Table.

	Args:
		path: File path
		delimiter: Field separator
		na_values: Cell texts read as missing values
		infer_types: Convert columns whose cells all parse as int (or
			float) to numbers; everything else stays str

	Raises:
		RelateValueError: empty file, duplicate headers, or ragged rows
	"""
	path = Path(path)
	na_values = set(na_values)

	with path.open(newline='', encoding=encoding) as f:
		reader = csv.reader(f, delimiter=delimiter)
		try:
			header = next(reader)
		except StopIteration:
			raise RelateValueError(f"{path} is empty; expected a header row") from None

		columns = [[] for _ in header]
		for line_no, row in enumerate(reader, start=2):
			if not row:
				continue
			if len(row) != len(header):
				raise RelateValueError(
					f"{path}:{line_no} has {len(row)} fields, expected {len(header)}"
				)
			for cells, cell in zip(columns, row):
				cells.append(None if cell in na_values else cell)

	if infer_types:
		columns = [_infer_column(cells) for cells in columns]

	if len(set(header)) != len(header):
		raise RelateValueError(f"{path} has duplicate column names in its header: {header}")

	table = Table([Column(cells, name=name) for name, cells in zip(header, columns)])
	log.debug('read_csv: %s -> %d x %d', path, *table.shape)
	return table


def write_csv(table, path, delimiter=',', na_rep='', encoding='utf-8'):
	"""Write a Table as a header-first delimited file. Missing values become na_rep."""
	if not isinstance(table, Table):
		raise RelateTypeError(f"Expected a Table, got {type(table).__name__}")
	path = Path(path)
	with path.open('w', newline='', encoding=encoding) as f:
		writer = csv.writer(f, delimiter=delimiter)
		writer.writerow(table.column_names())
		for row in table.rows():
			writer.writerow([na_rep if is_missing(v) else v for v in row])
	log.debug('write_csv: %d x %d -> %s', *table.shape, path)
	return path
