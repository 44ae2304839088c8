"""
py-relate: relational combination of tables in pure Python

Joins and binds with SQL-style semantics over small, immutable,
column-oriented tables.

Main classes:
    - Column: named, immutable sequence of values with an inferred dtype
    - Table: uniquely named columns of equal length

Combination:
    - inner_join, left_join, right_join, full_join: key-matched joins
    - cross_join: Cartesian product
    - semi_join, anti_join: filter left rows by presence of a match
    - bind_rows, bind_cols: vertical and horizontal stacking
"""

from .column import Column
from .table import Table
from .joins import inner_join, left_join, right_join, full_join, cross_join, semi_join, anti_join
from .binds import bind_rows, bind_cols
from .aesthetics import Aesthetics, aes, resolve_aesthetics, layer_data
from .csv import read_csv, write_csv
from .config import Options, get_options, set_options, options
from .typing import DataType
from ._log import setup_logging
from .errors import (
	RelateError,
	RelateKeyError,
	RelateValueError,
	RelateTypeError,
	RelateIndexError,
	AmbiguousKeyError,
	RowCountMismatchError,
	UnmatchedAestheticError,
)

__version__ = "0.1.0"
__all__ = [
	"Column",
	"Table",
	"DataType",
	"inner_join",
	"left_join",
	"right_join",
	"full_join",
	"cross_join",
	"semi_join",
	"anti_join",
	"bind_rows",
	"bind_cols",
	"Aesthetics",
	"aes",
	"resolve_aesthetics",
	"layer_data",
	"read_csv",
	"write_csv",
	"Options",
	"get_options",
	"set_options",
	"options",
	"setup_logging",
	"RelateError",
	"RelateKeyError",
	"RelateValueError",
	"RelateTypeError",
	"RelateIndexError",
	"AmbiguousKeyError",
	"RowCountMismatchError",
	"UnmatchedAestheticError",
]
