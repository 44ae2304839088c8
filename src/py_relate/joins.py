"""
Relational joins between two Tables.

Every join hashes the right table's key tuples once, probes it with each
left row, and then assembles the result column by column from the list of
(left row, right row) pairs. A None on either side of a pair is an
unmatched row and becomes a missing value in the output.
"""

import logging

from .column import Column
from .config import get_options, _check_na_matches, _check_suffix
from .errors import AmbiguousKeyError, RelateTypeError, RelateValueError, _warn
from .naming import _join_names
from .table import Table
from .typing import is_missing


log = logging.getLogger(__name__)

EXPECTATIONS = ('one_to_one', 'many_to_one', 'one_to_many', 'many_to_many')


class _NA:
	"""Stand-in for a missing key value when missing keys are allowed to match."""
	__slots__ = ()

	def __repr__(self):
		return 'NA'


_NA_KEY = _NA()


# ----------------------------------------------------------------------
# Argument handling
# ----------------------------------------------------------------------

def _as_name_list(names, arg):
	if isinstance(names, str):
		return [names]
	if isinstance(names, (list, tuple)) and all(isinstance(s, str) for s in names):
		return list(names)
	raise RelateTypeError(
		f"{arg} must be a column name or a list of column names, got {type(names).__name__}"
	)


def _check_tables(left, right):
	for side, table in (('left', left), ('right', right)):
		if not isinstance(table, Table):
			raise RelateTypeError(f"{side} side of a join must be a Table, got {type(table).__name__}")


def _resolve_keys(left, right, by, left_on, right_on):
	"""
	Work out which columns to match on.

	Returns:
		(left_idx, right_idx) parallel lists of column positions
	"""
	if by is not None and (left_on is not None or right_on is not None):
		raise RelateValueError("Pass either by or left_on/right_on, not both")

	if left_on is not None or right_on is not None:
		if left_on is None or right_on is None:
			raise RelateValueError("left_on and right_on must be given together")
		left_names = _as_name_list(left_on, 'left_on')
		right_names = _as_name_list(right_on, 'right_on')
	elif by is None:
		common = [name for name in left.column_names() if name in right]
		if not common:
			raise AmbiguousKeyError(
				"No common columns to join by. Left has "
				f"{left.column_names()}, right has {right.column_names()}; pass by= explicitly."
			)
		log.info('joining by common column(s) %s', common)
		left_names = right_names = common
	elif isinstance(by, dict):
		left_names = _as_name_list(list(by.keys()), 'by')
		right_names = _as_name_list(list(by.values()), 'by')
	else:
		left_names = right_names = _as_name_list(by, 'by')

	if not left_names or not right_names:
		raise RelateValueError("Must specify at least 1 join key")

	if len(left_names) != len(right_names):
		raise RelateValueError(
			f"left_on and right_on must have same length: "
			f"got {len(left_names)} and {len(right_names)}"
		)

	left_idx = [left._column_index(n, context="left table") for n in left_names]
	right_idx = [right._column_index(n, context="right table") for n in right_names]

	for side, idx in (('left', left_idx), ('right', right_idx)):
		if len(set(idx)) != len(idx):
			raise RelateValueError(f"Join key columns on the {side} side must be distinct")

	for i, (li, ri) in enumerate(zip(left_idx, right_idx)):
		left_schema = left._underlying[li].schema()
		right_schema = right._underlying[ri].schema()
		if not left_schema.is_compatible_key(right_schema):
			raise RelateTypeError(
				f"Join key at index {i} has mismatched dtypes: "
				f"{left_schema.kind.__name__} (left) vs {right_schema.kind.__name__} (right)"
			)

	return left_idx, right_idx


def _resolve_options(suffix, na_matches):
	opts = get_options()
	suffix = opts.suffix if suffix is None else _check_suffix(suffix)
	na_matches = opts.na_matches if na_matches is None else _check_na_matches(na_matches)
	return suffix, na_matches


def _check_expect(expect):
	if expect is not None and expect not in EXPECTATIONS:
		raise RelateValueError(
			f"Invalid expect='{expect}'. "
			"Must be one of 'one_to_one', 'many_to_one', 'one_to_many', 'many_to_many'."
		)


# ----------------------------------------------------------------------
# Matching
# ----------------------------------------------------------------------

def _validate_key_tuple_hashable(key_tuple, key_cols, row_idx, side):
	"""
	Raise a RelateTypeError naming the offending key component.
	"""
	for component, col in zip(key_tuple, key_cols):
		try:
			hash(component)
		except TypeError as e:
			raise RelateTypeError(
				f"Join key value in '{col._name}' at row {row_idx} on the {side} side is not hashable: "
				f"{type(component).__name__}. Join keys must be hashable."
			) from e
	raise RelateTypeError(f"Join key at row {row_idx} on the {side} side is not hashable.")


def _row_keys(table, key_idx, na_matches):
	"""
	Yield one key tuple per row. Rows whose key contains a missing value
	yield None under na_matches='never', so they can never match.
	"""
	data = [table._underlying[i]._underlying for i in key_idx]
	for row_idx in range(len(table)):
		key = tuple(col[row_idx] for col in data)
		if any(is_missing(v) for v in key):
			if na_matches == 'never':
				yield None
				continue
			key = tuple(_NA_KEY if is_missing(v) else v for v in key)
		yield key


def _match_rows(left, right, left_idx, right_idx, na_matches, expect):
	"""
	For each left row, the list of right rows it matches (possibly empty).

	Also returns the set of right rows matched by anything. Cardinality
	expectations are enforced here, as are hashability checks.
	"""
	right_key_cols = [right._underlying[i] for i in right_idx]
	left_key_cols = [left._underlying[i] for i in left_idx]

	# Build hash map on right: key_tuple -> list of row indices
	right_index = {}
	right_index_get = right_index.get
	for row_idx, key in enumerate(_row_keys(right, right_idx, na_matches)):
		if key is None:
			continue
		try:
			bucket = right_index_get(key)
		except TypeError:
			_validate_key_tuple_hashable(key, right_key_cols, row_idx, 'right')
		if bucket is None:
			right_index[key] = [row_idx]
		else:
			bucket.append(row_idx)

	check_right_unique = expect in ('one_to_one', 'many_to_one')
	if check_right_unique:
		duplicates = [(k, rows) for k, rows in right_index.items() if len(rows) > 1]
		if duplicates:
			example_key, example_rows = duplicates[0]
			raise RelateValueError(
				f"Join expectation '{expect}' violated: Right side has duplicate keys.\n"
				f"Found {len(duplicates)} duplicate key(s), e.g., {example_key} "
				f"appears {len(example_rows)} times."
			)

	check_left_unique = expect in ('one_to_one', 'one_to_many')
	left_keys_seen = set()
	many_to_many = None

	matches = []
	matched_right = set()
	for left_row, key in enumerate(_row_keys(left, left_idx, na_matches)):
		if key is None:
			matches.append(())
			continue
		try:
			rows = right_index_get(key, ())
		except TypeError:
			_validate_key_tuple_hashable(key, left_key_cols, left_row, 'left')

		if check_left_unique or expect is None:
			if key in left_keys_seen:
				if check_left_unique:
					raise RelateValueError(
						f"Join expectation '{expect}' violated: Left side has duplicate key {key}"
					)
				if len(rows) > 1 and many_to_many is None:
					many_to_many = (left_row, key)
			left_keys_seen.add(key)

		matches.append(rows)
		matched_right.update(rows)

	if expect is None and many_to_many is not None and get_options().warn_many_to_many:
		left_row, key = many_to_many
		_warn(
			f"Detected a many-to-many relationship between left and right: key {key} "
			f"(left row {left_row}) matches several rows on both sides. "
			"Pass expect='many_to_many' if this is intended.",
		)

	return matches, matched_right


# ----------------------------------------------------------------------
# Assembly
# ----------------------------------------------------------------------

def _assemble(left, right, pairs, left_idx, right_idx, suffix):
	"""
	Build the result table from (left_row, right_row) pairs in column-major
	order. Key columns appear once, under the left name, and take their
	value from whichever side of the pair is present.
	"""
	left_rows = [li for li, _ in pairs]
	right_rows = [ri for _, ri in pairs]

	key_of_left = dict(zip(left_idx, right_idx))
	right_key_set = set(right_idx)
	right_keep = [j for j in range(right.ncols) if j not in right_key_set]

	left_names = left.column_names()
	key_names = [left_names[i] for i in left_idx]
	right_names = [right._underlying[j]._name for j in right_keep]
	left_out, right_out = _join_names(left_names, right_names, key_names, suffix)

	result_cols = []
	for i, col in enumerate(left._underlying):
		if i in key_of_left and any(li is None for li in left_rows):
			left_data = col._underlying
			right_data = right._underlying[key_of_left[i]]._underlying
			values = [left_data[li] if li is not None else right_data[ri] for li, ri in pairs]
			result_cols.append(Column(values, name=left_out[i]))
		else:
			result_cols.append(col.take(left_rows).rename(left_out[i]))

	for j, name in zip(right_keep, right_out):
		result_cols.append(right._underlying[j].take(right_rows).rename(name))

	return Table._from_columns(result_cols, len(pairs))


def _keyed_join(how, left, right, by, left_on, right_on, suffix, na_matches, expect):
	_check_tables(left, right)
	_check_expect(expect)
	suffix, na_matches = _resolve_options(suffix, na_matches)
	left_idx, right_idx = _resolve_keys(left, right, by, left_on, right_on)

	matches, matched_right = _match_rows(left, right, left_idx, right_idx, na_matches, expect)

	pairs = []
	for left_row, rows in enumerate(matches):
		if rows:
			pairs.extend((left_row, right_row) for right_row in rows)
		elif how in ('left', 'full'):
			pairs.append((left_row, None))

	if how in ('right', 'full'):
		pairs.extend((None, r) for r in range(len(right)) if r not in matched_right)

	result = _assemble(left, right, pairs, left_idx, right_idx, suffix)
	log.debug(
		'%s_join: %d x %d rows on %s -> %d rows',
		how, len(left), len(right), [left._underlying[i]._name for i in left_idx], len(result),
	)
	return result


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def inner_join(left, right, by=None, *, left_on=None, right_on=None,
		suffix=None, na_matches=None, expect=None):
	"""
	Inner join two Tables on key columns.
	Only returns rows where keys match in both tables.

	Args:
		left, right: Tables to join
		by: Key column name, list of names, or {left_name: right_name}.
			Defaults to the columns the two tables have in common.
		left_on, right_on: Alternative to ``by`` for differently named keys
		suffix: (left, right) strings appended to clashing non-key names
		na_matches: 'never' (missing keys match nothing) or 'na'
		expect: Cardinality expectation - 'one_to_one', 'many_to_one',
			'one_to_many', 'many_to_many', or None for no check

	Returns:
		Table with left columns followed by right's non-key columns
	"""
	return _keyed_join('inner', left, right, by, left_on, right_on, suffix, na_matches, expect)


def left_join(left, right, by=None, *, left_on=None, right_on=None,
		suffix=None, na_matches=None, expect=None):
	"""
	Left join two Tables on key columns.
	Returns all rows from left, with matching rows from right (or None for no match).
	A left row with several matches appears once per match.
	"""
	return _keyed_join('left', left, right, by, left_on, right_on, suffix, na_matches, expect)


def right_join(left, right, by=None, *, left_on=None, right_on=None,
		suffix=None, na_matches=None, expect=None):
	"""
	Right join: every row of right is kept. Matched rows come first in left
	order, then the right rows nothing matched, in right order.
	"""
	return _keyed_join('right', left, right, by, left_on, right_on, suffix, na_matches, expect)


def full_join(left, right, by=None, *, left_on=None, right_on=None,
		suffix=None, na_matches=None, expect=None):
	"""
	Full outer join of two Tables. Includes:
		- All rows from left table
		- All rows from right table
		- Matching rows combined once
		- None where no match exists
	"""
	return _keyed_join('full', left, right, by, left_on, right_on, suffix, na_matches, expect)


def cross_join(left, right, *, suffix=None):
	"""
	Cartesian product: every left row paired with every right row.
	The result has len(left) * len(right) rows.
	"""
	_check_tables(left, right)
	suffix, _ = _resolve_options(suffix, None)
	pairs = [(li, ri) for li in range(len(left)) for ri in range(len(right))]
	result = _assemble(left, right, pairs, [], [], suffix)
	log.debug('cross_join: %d x %d rows -> %d rows', len(left), len(right), len(result))
	return result


def _filtering_join(keep_matched, left, right, by, left_on, right_on, na_matches):
	_check_tables(left, right)
	_, na_matches = _resolve_options(None, na_matches)
	left_idx, right_idx = _resolve_keys(left, right, by, left_on, right_on)
	matches, _ = _match_rows(left, right, left_idx, right_idx, na_matches, 'many_to_many')
	keep = [i for i, rows in enumerate(matches) if bool(rows) == keep_matched]
	result = left.take(keep)
	log.debug(
		'%s_join: %d x %d rows -> %d rows',
		'semi' if keep_matched else 'anti', len(left), len(right), len(result),
	)
	return result


def semi_join(left, right, by=None, *, left_on=None, right_on=None, na_matches=None):
	"""
	Rows of left that have at least one match in right.

	Only left's columns are returned, and each left row at most once no
	matter how many right rows it matches.
	"""
	return _filtering_join(True, left, right, by, left_on, right_on, na_matches)


def anti_join(left, right, by=None, *, left_on=None, right_on=None, na_matches=None):
	"""Rows of left that have no match in right. Only left's columns are returned."""
	return _filtering_join(False, left, right, by, left_on, right_on, na_matches)
