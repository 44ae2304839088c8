import pytest

from py_relate import Table
from py_relate.config import Options
import py_relate.config as config


@pytest.fixture(autouse=True)
def default_options():
	"""Every test starts and ends with the library defaults."""
	config._current = Options()
	yield
	config._current = Options()


@pytest.fixture
def band_members():
	return Table({
		'name': ['Mick', 'John', 'Paul'],
		'band': ['Stones', 'Beatles', 'Beatles'],
	})


@pytest.fixture
def band_instruments():
	return Table({
		'name': ['John', 'Paul', 'Keith'],
		'plays': ['guitar', 'bass', 'guitar'],
	})
