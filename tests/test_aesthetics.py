import pytest
from py_relate import Table, Column, Aesthetics, aes, resolve_aesthetics, layer_data
from py_relate.errors import RelateTypeError, RowCountMismatchError, UnmatchedAestheticError


@pytest.fixture
def sales():
	return Table({
		'year': [2021, 2022, 2023],
		'sales': [10.5, 12.0, 9.75],
		'region': ['north', 'south', 'north'],
	})


def test_aes_builds_mapping():
	mapping = aes(x='year', y='sales', color='region')

	assert dict(mapping) == {'x': 'year', 'y': 'sales', 'colour': 'region'}
	assert mapping['color'] == 'region'
	assert repr(mapping) == "aes(x='year', y='sales', colour='region')"


def test_resolve_returns_columns(sales):
	resolved = resolve_aesthetics(sales, aes(x='year', y='sales'))

	assert list(resolved) == ['x', 'y']
	assert list(resolved['x']) == [2021, 2022, 2023]
	assert resolved['y'].name == 'sales'


def test_plain_dict_mapping(sales):
	resolved = resolve_aesthetics(sales, {'x': 'Year'})

	# Sanitized, case-insensitive lookup applies here too
	assert list(resolved['x']) == [2021, 2022, 2023]


def test_unmatched_aesthetic(sales):
	with pytest.raises(UnmatchedAestheticError, match="Aesthetic 'colour' maps to column 'country'"):
		resolve_aesthetics(sales, aes(x='year', colour='country'))


def test_column_values_are_used_directly(sales):
	size = Column([1, 2, 3], name='weight')
	resolved = resolve_aesthetics(sales, aes(x='year', size=size))

	assert resolved['size'] is size

	with pytest.raises(RowCountMismatchError):
		resolve_aesthetics(sales, aes(size=Column([1, 2])))


def test_bad_mapping_values():
	with pytest.raises(RelateTypeError):
		aes(x=3)
	with pytest.raises(RelateTypeError):
		resolve_aesthetics({'year': [1]}, aes(x='year'))


def test_layer_mapping_overrides_plot_mapping():
	plot = aes(x='year', y='sales')
	layer = plot | {'y': 'region', 'color': 'region'}

	assert isinstance(layer, Aesthetics)
	assert dict(layer) == {'x': 'year', 'y': 'region', 'colour': 'region'}


def test_layer_data(sales):
	data = layer_data(sales, aes(x='year', y='sales', colour='region'))

	assert data.column_names() == ['x', 'y', 'colour']
	assert data.rows()[0] == (2021, 10.5, 'north')
	# Source table unchanged
	assert sales.column_names() == ['year', 'sales', 'region']
