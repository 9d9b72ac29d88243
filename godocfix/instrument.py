from __future__ import annotations

import logging
import os
from typing import List, Sequence, Tuple

from .fs_scan import scan_repository
from .go_parse import DocTarget, GoParseError, apply_rewrites, extract_targets
from .model import CommentFix, FileReport, GoFile, RewriteConfig, RunReport
from .rewrite import classify, is_exported, rewrite

logger = logging.getLogger(__name__)


class InstrumentError(Exception):
	pass


def instrument_source(source: str, config: RewriteConfig) -> Tuple[str, List[CommentFix], int]:
	"""Rewrite the doc comments of one Go source text.

	Returns the new text, the fixes applied and the number of declarations
	that were looked at. Raises GoParseError on invalid Go.
	"""
	data = source.encode("utf-8")
	targets = extract_targets(data)
	edits: List[Tuple[DocTarget, Sequence[str]]] = []
	fixes: List[CommentFix] = []
	for target in targets:
		exported = is_exported(target.name)
		new_lines = rewrite(target.name, exported, target.lines, config)
		if new_lines == target.lines:
			continue
		edits.append((target, new_lines))
		fixes.append(
			CommentFix(
				name=target.name,
				kind=target.kind,
				line=target.line,
				defect=classify(target.name, target.lines),
				before=target.lines[:1],
				after=new_lines[:1],
			)
		)
	if not edits:
		return source, fixes, len(targets)
	return apply_rewrites(data, edits).decode("utf-8"), fixes, len(targets)


def instrument_file(go_file: GoFile, config: RewriteConfig, dry_run: bool = False) -> FileReport:
	try:
		with open(go_file.path, "r", encoding="utf-8") as fh:
			text = fh.read()
		new_text, fixes, declarations = instrument_source(text, config)
		written = False
		if new_text != text and not dry_run:
			with open(go_file.path, "w", encoding="utf-8") as fh:
				fh.write(new_text)
			written = True
	except (OSError, UnicodeDecodeError, GoParseError) as e:
		raise InstrumentError(f"failed instrumenting file {go_file.path}: {e}") from e

	for fix in fixes:
		logger.debug("%s:%d %s %s (%s)", go_file.rel_path, fix.line, fix.kind, fix.name, fix.defect.value)
	if written:
		logger.info("rewrote %d comments in %s", len(fixes), go_file.rel_path)
	elif fixes:
		logger.info("would rewrite %d comments in %s", len(fixes), go_file.rel_path)
	return FileReport(
		path=go_file.path,
		rel_path=go_file.rel_path,
		declarations=declarations,
		fixes=fixes,
		written=written,
	)


def instrument_tree(root: str, config: RewriteConfig, dry_run: bool = False) -> RunReport:
	"""Fix doc comments of every Go file under ``root``.

	Stops on the first file that cannot be read, parsed or written; files
	already written stay written.
	"""
	root = os.path.abspath(root)
	if not os.path.isdir(root):
		raise InstrumentError(f"not a directory: {root}")
	logger.info("Adding default go doc to each exported type/func recursively in %s", root)

	try:
		files = scan_repository(root)
	except OSError as e:
		raise InstrumentError(f"failed scanning {root}: {e}") from e

	reports: List[FileReport] = []
	for go_file in files:
		reports.append(instrument_file(go_file, config, dry_run=dry_run))
	return RunReport(root=root, config=config, dry_run=dry_run, files=reports)
