"""
Column dtypes for py-relate.

A DataType is pure metadata:
  - kind is the Python type shared by the non-missing values
  - nullable records whether any value is missing
  - promotion returns new instances, never mutates
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional, Type
import math

from .errors import _warn


# Promotion ladders; a column climbs to the higher rung of the two
_NUMERIC_LADDER = (bool, int, float, complex)
_TEMPORAL_LADDER = (date, datetime)

# Subclasses first: bool before int, datetime before date
_SCALAR_KINDS = (bool, int, float, complex, str, bytes, datetime, date, list, dict, tuple)


def _climb(ladder, a, b):
    return max(a, b, key=ladder.index)


@dataclass(frozen=True)
class DataType:
    """
    Describes the semantic type of a Column.

    Attributes
    ----------
    kind : Type
        Python type of the non-missing values (object when mixed)
    nullable : bool
        Whether the column contains missing values

    Examples
    --------
    >>> DataType(int)
    <int>
    >>> DataType(int).promote_with(None)
    <int nullable>
    >>> DataType(int).promote_with(2.5)
    <float>
    """

    kind: Type[Any]
    nullable: bool = False

    def __repr__(self):
        suffix = " nullable" if self.nullable else ""
        return f"<{self.kind.__name__}{suffix}>"

    @property
    def is_numeric(self) -> bool:
        return self.kind in _NUMERIC_LADDER

    @property
    def is_temporal(self) -> bool:
        return self.kind in _TEMPORAL_LADDER

    def with_nullable(self, nullable: bool = True) -> "DataType":
        if nullable == self.nullable:
            return self
        return DataType(self.kind, nullable)

    def promote_with(self, value: Any) -> "DataType":
        """
        Widen this dtype just enough to hold ``value``.

        Missing values only lift nullability. Numeric values climb the
        bool -> int -> float -> complex ladder, temporal values climb
        date -> datetime. Anything else degrades the column to object.
        """
        if is_missing(value):
            # NaN still tells us the column holds floats
            if isinstance(value, float) and self.kind in (bool, int):
                return DataType(float, nullable=True)
            return self.with_nullable(True)

        vkind = infer_kind(value)
        if vkind is self.kind or self.kind is object:
            return self

        for ladder in (_NUMERIC_LADDER, _TEMPORAL_LADDER):
            if self.kind in ladder and vkind in ladder:
                new_kind = _climb(ladder, self.kind, vkind)
                if new_kind is self.kind:
                    return self
                return DataType(new_kind, self.nullable)

        _warn(
            f"Degrading column<{self.kind.__name__}> to column<object>: "
            f"cannot hold a value of type {vkind.__name__}",
        )
        return DataType(object, self.nullable)

    def is_compatible_key(self, other: "DataType") -> bool:
        """True if values of the two dtypes may be compared for join equality."""
        if self.kind is other.kind:
            return True
        if self.kind is object or other.kind is object:
            return True
        # int and float compare by value; bool is kept apart from int
        if {self.kind, other.kind} <= {int, float}:
            return True
        if self.is_temporal and other.is_temporal:
            return True
        return False


def is_missing(value: Any) -> bool:
    """None and float NaN are both treated as missing."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def infer_kind(value: Any) -> Optional[Type]:
    """The dtype kind for one scalar; None for None, object for anything unrecognised."""
    if value is None:
        return None
    for kind in _SCALAR_KINDS:
        if isinstance(value, kind):
            return kind
    return object


def infer_dtype(values: Iterable[Any]) -> DataType:
    """
    Dtype of a sequence of scalars. Leading Nones are skipped when picking
    the kind but still make the result nullable.

    Examples
    --------
    >>> infer_dtype([None, 2, 3])
    <int nullable>
    >>> infer_dtype([1, 2.5])
    <float>
    >>> infer_dtype([])
    <object nullable>
    """
    values = iter(values)
    saw_none = False
    for first in values:
        if first is None:
            saw_none = True
            continue
        dtype = DataType(infer_kind(first), nullable=saw_none or is_missing(first))
        for v in values:
            dtype = dtype.promote_with(v)
        return dtype

    # All values missing, or nothing at all
    return DataType(object, nullable=True)
