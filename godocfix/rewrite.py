from __future__ import annotations

import unicodedata
from typing import List, Sequence

from .model import Defect, RewriteConfig
from .segment import describe


def is_exported(name: str) -> bool:
	return bool(name) and unicodedata.category(name[0]) == "Lu"


def classify(name: str, lines: Sequence[str]) -> Defect:
	if not lines:
		return Defect.EMPTY
	head = lines[0]
	if head == f"// {name}" or head == f"//{name}":
		return Defect.JUST_NAME
	if not head.startswith(f"// {name} "):
		return Defect.MISSING_NAME_PREFIX
	return Defect.WELL_FORMED


def trim_prefix(line: str, name: str) -> str:
	"""Strip the first matching comment prefix, most specific first.

	Prefixes carrying the name are tried before the bare "// " and "//"
	so "// Name: text" reduces to "text" instead of "Name: text".
	"""
	prefixes = (
		f"//{name} ",
		f"// {name}: ",
		f"// {name}:",
		f"//{name}: ",
		f"//{name}:",
		"// ",
		"//",
	)
	for prefix in prefixes:
		if line.startswith(prefix):
			return line[len(prefix):]
	return line


def doc_line(name: str, config: RewriteConfig) -> str:
	if config.auto_description:
		return f"// {name} {describe(name)}"
	return config.format % name


def render(name: str, defect: Defect, lines: Sequence[str], config: RewriteConfig) -> List[str]:
	result = list(lines)
	if defect is Defect.EMPTY:
		result.insert(0, doc_line(name, config))
	elif defect is Defect.JUST_NAME:
		result[0] = doc_line(name, config)
	elif defect is Defect.MISSING_NAME_PREFIX:
		result[0] = f"// {name} {trim_prefix(result[0], name)}"
	return result


def rewrite(name: str, exported: bool, lines: Sequence[str], config: RewriteConfig) -> List[str]:
	"""Return the comment block for ``name`` with its head line fixed.

	Non-exported names and well formed blocks come back unchanged.
	"""
	if not exported:
		return list(lines)
	return render(name, classify(name, lines), lines, config)
