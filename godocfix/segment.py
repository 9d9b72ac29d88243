from __future__ import annotations

import unicodedata
from typing import List

_LOWER = 1
_UPPER = 2
_DIGIT = 3
_OTHER = 4


def _char_class(ch: str) -> int:
	category = unicodedata.category(ch)
	if category == "Ll":
		return _LOWER
	if category == "Lu":
		return _UPPER
	if category == "Nd":
		return _DIGIT
	return _OTHER


def _is_valid_text(src: str) -> bool:
	try:
		src.encode("utf-8")
	except UnicodeEncodeError:
		return False
	return True


def split(src: str) -> List[str]:
	"""Split an identifier into words on character class changes.

	"PDFLoader" -> ["PDF", "Loader"], "CamelCase2" -> ["Camel", "Case", "2"].
	Text that is not valid UTF-8 (lone surrogates) comes back whole.
	"""
	if not _is_valid_text(src):
		return [src]

	runs: List[List[str]] = []
	classes: List[int] = []
	last_class = 0
	for ch in src:
		cls = _char_class(ch)
		if cls == last_class:
			runs[-1].append(ch)
		else:
			runs.append([ch])
			classes.append(cls)
		last_class = cls

	# handle upper case -> lower case sequences, e.g.
	# "PDFL", "oader" -> "PDF", "Loader"
	for i in range(len(runs) - 1):
		if classes[i] == _UPPER and classes[i + 1] == _LOWER and runs[i]:
			runs[i + 1].insert(0, runs[i].pop())

	return ["".join(r) for r in runs if r]


def _lower(word: str) -> str:
	# Per code point, one in one out: no final sigma, "İ" -> "i".
	return "".join(ch.lower()[0] for ch in word)


def describe(name: str) -> str:
	"""Lower-cased, space separated words of ``name``."""
	return " ".join(_lower(word) for word in split(name))
