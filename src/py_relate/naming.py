"""Column name sanitization, uniquification and join suffixing."""

from __future__ import annotations
import re


def _sanitize_user_name(name) -> str | None:
	"""Sanitize column name to valid Python identifier.

	Rules:
	- Convert to lowercase
	- Replace runs of non-alphanumeric chars (except _) with single _
	- Strip leading/trailing underscores
	- Prefix with 'c' if starts with digit
	- Return None if empty after sanitization
	"""
	if not isinstance(name, str):
		name = str(name)

	name = name.lower()
	sanitized = re.sub(r'[^a-z0-9_]+', '_', name)
	sanitized = sanitized.strip('_')

	if sanitized == "":
		return None

	if sanitized[0].isdigit():
		sanitized = "c" + sanitized

	return sanitized


def _uniquify(base: str, seen: set[str]) -> str:
	"""Make a unique name by adding __2, __3, etc if needed."""
	if base not in seen:
		return base

	i = 2
	while f"{base}__{i}" in seen:
		i += 1

	return f"{base}__{i}"


def _system_name(idx: int) -> str:
	return f"col{idx}_"


def _join_names(left_names, right_names, key_names, suffix):
	"""
	Output names for a join result.

	left_names are emitted in full; right_names are the right-hand columns
	that survive into the result (keys already removed). Non-key names that
	appear on both sides get suffix[0] on the left and suffix[1] on the
	right. Whatever still clashes afterwards is uniquified.

	Returns:
		(left_out, right_out) lists of names, parallel to the inputs
	"""
	left_suffix, right_suffix = suffix
	key_names = set(key_names)
	left_plain = {n for n in left_names if n not in key_names}
	shared = left_plain & set(right_names)

	seen = set()
	left_out = []
	for name in left_names:
		out = name + left_suffix if name in shared else name
		out = _uniquify(out, seen)
		seen.add(out)
		left_out.append(out)

	right_out = []
	for name in right_names:
		out = name + right_suffix if name in shared else name
		out = _uniquify(out, seen)
		seen.add(out)
		right_out.append(out)

	return left_out, right_out
