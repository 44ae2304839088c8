"""Display and repr logic for Column and Table."""

from __future__ import annotations
from datetime import date
from typing import List

from .config import get_options
from .typing import is_missing


_ELLIPSIS = object()


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _kind_name(col) -> str:
	return col._dtype.kind.__name__


def _is_numeric(col) -> bool:
	return col._dtype.kind in (int, float)


def _format_value(v, kind) -> str:
	if v is _ELLIPSIS:
		return '...'
	if is_missing(v):
		return 'NA'
	if kind is float:
		return f"{v:.1f}" if float(v).is_integer() else f"{v:g}"
	if kind is date:
		return v.isoformat()
	if kind is str:
		return repr(v)
	return str(v)


def _format_column(col, max_preview: int) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	vals = col._underlying
	if len(vals) > max_preview * 2:
		preview = list(vals[:max_preview]) + [_ELLIPSIS] + list(vals[-max_preview:])
	else:
		preview = list(vals)

	kind = col._dtype.kind
	return [_format_value(v, kind) for v in preview]


def _header(name: str) -> str:
	return repr(name) if _needs_quoting(name) else name


def _pad(text: str, width: int, numeric: bool) -> str:
	return text.rjust(width) if numeric else text.ljust(width)


def _footer(obj, dtype_list=None, truncated=False, shown=None) -> str:
	"""Generate footer line based on shape and dtypes."""
	from .table import Table

	if not isinstance(obj, Table):
		return f"# {len(obj)} element column <{_kind_name(obj)}>"

	rows, cols = obj.shape
	if truncated:
		d = ", ".join(dtype_list[:shown]) + ", ..., " + ", ".join(dtype_list[-shown:])
	else:
		d = ", ".join(dtype_list)
	return f"# {rows}×{cols} table <{d}>"


def _repr_column(col) -> str:
	"""Pretty repr for a Column."""
	formatted = _format_column(col, get_options().max_head_rows)
	numeric = _is_numeric(col)

	width = max((len(s) for s in formatted), default=0)
	if col._name:
		width = max(width, len(_header(col._name)))

	lines = []
	if col._name:
		lines.append(_pad(_header(col._name), width, numeric))
	lines.extend(_pad(s, width, numeric) for s in formatted)
	lines.append("")
	lines.append(_footer(col))
	return "\n".join(lines)


def _repr_table(tbl) -> str:
	"""Pretty repr for a Table."""
	opts = get_options()
	cols = tbl.columns()
	num_cols = len(cols)

	if num_cols == 0:
		return f"# {tbl.nrows}×0 table"

	max_cols = opts.max_head_cols
	truncated = num_cols > max_cols * 2
	if truncated:
		shown = list(cols[:max_cols]) + [None] + list(cols[-max_cols:])
	else:
		shown = list(cols)

	# Each entry: (header, body lines, numeric)
	blocks = []
	for col in shown:
		if col is None:
			body_len = len(blocks[0][1]) if blocks else 0
			blocks.append(("...", ["..."] * body_len, False))
			continue
		blocks.append((_header(col._name), _format_column(col, opts.max_head_rows), _is_numeric(col)))

	widths = [max([len(h)] + [len(s) for s in body]) for h, body, _ in blocks]

	lines = ["  ".join(_pad(h, w, num) for (h, _, num), w in zip(blocks, widths))]
	nrows = len(blocks[0][1])
	for r in range(nrows):
		lines.append("  ".join(_pad(body[r], w, num) for (_, body, num), w in zip(blocks, widths)))

	lines.append("")
	lines.append(_footer(tbl, [_kind_name(c) for c in cols], truncated, max_cols))
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by Column.__repr__ and Table.__repr__."""
	from .table import Table
	if isinstance(obj, Table):
		return _repr_table(obj)
	return _repr_column(obj)
