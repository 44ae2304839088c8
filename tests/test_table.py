import math
from datetime import date

import pytest
from py_relate import Column, Table, DataType
from py_relate.errors import (
	RelateIndexError,
	RelateKeyError,
	RelateTypeError,
	RelateValueError,
)


class TestColumn:

	def test_dtype_inference(self):
		assert Column([1, 2, 3]).schema() == DataType(int)
		assert Column([1, 2.5]).schema() == DataType(float)
		assert Column(['a', None]).schema() == DataType(str, nullable=True)
		assert Column([None, 'a']).schema() == DataType(str, nullable=True)
		assert Column([]).schema() == DataType(object, nullable=True)
		assert Column([date(2024, 1, 1)]).schema().is_temporal

	def test_nan_is_missing(self):
		col = Column([1.0, float('nan')])

		assert col.schema() == DataType(float, nullable=True)
		assert col.isna().to_list() == [False, True]

	def test_values_are_immutable_snapshots(self):
		data = [1, 2, 3]
		col = Column(data, name='a')
		data.append(4)

		assert len(col) == 3
		assert isinstance(col._underlying, tuple)

	def test_rename_returns_new_column(self):
		col = Column([1], name='a')
		renamed = col.rename('b')

		assert col.name == 'a'
		assert renamed.name == 'b'
		assert renamed.to_list() == [1]

	def test_take_with_gaps(self):
		col = Column(['a', 'b', 'c'], name='letters')
		taken = col.take([2, None, 0])

		assert taken.to_list() == ['c', None, 'a']
		assert taken.schema() == DataType(str, nullable=True)
		assert taken.name == 'letters'

	def test_indexing(self):
		col = Column([10, 20, 30, 40], name='n')

		assert col[0] == 10
		assert col[-1] == 40
		assert col[1:3].to_list() == [20, 30]
		assert col[[True, False, True, False]].to_list() == [10, 30]
		assert col[[3, 0]].to_list() == [40, 10]

	def test_index_errors(self):
		col = Column([1, 2])

		with pytest.raises(RelateIndexError):
			col[5]
		with pytest.raises(RelateValueError, match="Boolean mask"):
			col[[True]]
		with pytest.raises(RelateTypeError):
			col['a']

	def test_fillna(self):
		col = Column([1, None, 3], name='n').fillna(0)

		assert col.to_list() == [1, 0, 3]
		assert not col.schema().nullable

	def test_rejects_scalars_and_strings(self):
		with pytest.raises(RelateTypeError):
			Column(5)
		with pytest.raises(RelateTypeError):
			Column('abc')

	def test_equality_treats_missing_as_equal(self):
		assert Column([1, None], name='a') == Column([1, None], name='a')
		assert Column([float('nan')], name='a') == Column([None], name='a')
		assert Column([1], name='a') != Column([1], name='b')


class TestTableConstruction:

	def test_from_dict(self):
		t = Table({'a': [1, 2], 'b': ['x', 'y']})

		assert t.shape == (2, 2)
		assert len(t) == 2
		assert t.column_names() == ['a', 'b']

	def test_from_columns(self):
		t = Table([Column([1, 2], name='a'), Column([3, 4])])

		assert t.column_names() == ['a', 'col1_']

	def test_from_records(self):
		t = Table.from_records([
			{'name': 'John', 'band': 'Beatles'},
			{'name': 'Keith', 'plays': 'guitar'},
		])

		assert t.column_names() == ['name', 'band', 'plays']
		assert t.rows() == [('John', 'Beatles', None), ('Keith', None, 'guitar')]

	def test_empty(self):
		t = Table()

		assert t.shape == (0, 0)
		assert t.rows() == []

	def test_zero_columns_with_rows(self):
		t = Table({'a': [1, 2]}).select()

		assert t.shape == (2, 0)
		assert t.rows() == [(), ()]
		assert t.to_dicts() == [{}, {}]

	def test_mismatched_lengths(self):
		with pytest.raises(RelateValueError, match="Column 'b' has length 1, but table has 2 rows"):
			Table({'a': [1, 2], 'b': [3]})

	def test_duplicate_names(self):
		with pytest.raises(RelateValueError, match="Duplicate column name 'a'"):
			Table([Column([1], name='a'), Column([2], name='a')])

	def test_rejects_non_columns(self):
		with pytest.raises(RelateTypeError):
			Table([[1, 2, 3]])
		with pytest.raises(RelateTypeError):
			Table(42)

	def test_copy_constructor(self):
		t = Table({'a': [1]})
		assert Table(t).equals(t)


class TestTableAccess:

	@pytest.fixture
	def table(self):
		return Table({
			'Customer ID': [1, 2, 3],
			'name': ['Alice', 'Bob', 'Charlie'],
		})

	def test_column_by_exact_and_sanitized_name(self, table):
		assert list(table['Customer ID']) == [1, 2, 3]
		assert list(table['customer_id']) == [1, 2, 3]
		assert list(table.customer_id) == [1, 2, 3]

	def test_missing_column(self, table):
		with pytest.raises(RelateKeyError, match="Column 'missing' not found in Table"):
			table['missing']
		with pytest.raises(AttributeError):
			table.missing

	def test_row_access(self, table):
		assert table[0] == (1, 'Alice')
		assert table[-1] == (3, 'Charlie')
		with pytest.raises(RelateIndexError):
			table[3]

	def test_row_slicing_and_masks(self, table):
		assert table[1:].rows() == [(2, 'Bob'), (3, 'Charlie')]
		assert table[[True, False, True]].rows() == [(1, 'Alice'), (3, 'Charlie')]
		assert table[[2, 0]].rows() == [(3, 'Charlie'), (1, 'Alice')]

	def test_multi_column_selection(self, table):
		assert table['name', 'customer_id'].column_names() == ['name', 'Customer ID']

	def test_iteration_yields_row_views(self, table):
		names = [row.name for row in table]
		ids = [row['customer_id'] for row in table]
		firsts = [row[0] for row in table]

		assert names == ['Alice', 'Bob', 'Charlie']
		assert ids == [1, 2, 3]
		assert firsts == [1, 2, 3]

	def test_to_dicts_and_columns(self, table):
		assert table.to_dicts()[1] == {'Customer ID': 2, 'name': 'Bob'}
		assert table.to_columns() == {'Customer ID': [1, 2, 3], 'name': ['Alice', 'Bob', 'Charlie']}

	def test_contains_uses_exact_names(self, table):
		assert 'Customer ID' in table
		assert 'customer_id' not in table

	def test_dir_lists_sanitized_names(self, table):
		assert 'customer_id' in dir(table)

	def test_schema(self, table):
		assert table.schema() == {'Customer ID': DataType(int), 'name': DataType(str)}


class TestDerivedTables:

	@pytest.fixture
	def table(self):
		return Table({'a': [1, 2, 3], 'b': ['x', 'y', 'z']})

	def test_select(self, table):
		assert table.select('b').column_names() == ['b']
		assert table.select(['b', 'a']).column_names() == ['b', 'a']
		with pytest.raises(RelateValueError, match="more than once"):
			table.select('a', 'a')

	def test_rename_is_not_in_place(self, table):
		renamed = table.rename({'a': 'id'})

		assert renamed.column_names() == ['id', 'b']
		assert table.column_names() == ['a', 'b']
		assert table.rename(b='label').column_names() == ['a', 'label']

	def test_rename_errors(self, table):
		with pytest.raises(RelateKeyError):
			table.rename({'nope': 'x'})
		with pytest.raises(RelateValueError, match="duplicate"):
			table.rename({'a': 'b'})

	def test_take_and_head(self, table):
		assert table.take([None, 0]).rows() == [(None, None), (1, 'x')]
		assert table.head(2).rows() == [(1, 'x'), (2, 'y')]
		assert len(table.head(10)) == 3

	def test_equals(self, table):
		same = Table({'a': [1, 2, 3], 'b': ['x', 'y', 'z']})
		other_order = Table({'b': ['x', 'y', 'z'], 'a': [1, 2, 3]})

		assert table.equals(same)
		assert table == same
		assert not table.equals(other_order)
		assert not table.equals({'a': [1, 2, 3]})

	def test_nan_rows_compare_equal(self):
		assert Table({'a': [math.nan]}).equals(Table({'a': [None]}))
