from __future__ import annotations

import logging
import os
from typing import List

from .model import GoFile

logger = logging.getLogger(__name__)

SKIP_DIRS = {"vendor"}
GO_EXTENSION = ".go"
TEST_SUFFIX = "_test.go"


def is_test_file(filename: str) -> bool:
	return filename.endswith(TEST_SUFFIX)


def is_generated_file(path: str) -> bool:
	"""A file is generated when its name, or its first line, says so.

	The first line matches on "generated" or "GENERATED".
	"""
	if "generated" in os.path.basename(path):
		return True
	with open(path, "r", encoding="utf-8", errors="replace") as fh:
		first_line = fh.readline()
	return "generated" in first_line or "GENERATED" in first_line


def scan_repository(root: str) -> List[GoFile]:
	files: List[GoFile] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
		for filename in sorted(filenames):
			if not filename.endswith(GO_EXTENSION):
				continue
			path = os.path.join(dirpath, filename)
			if is_test_file(filename):
				logger.debug("skipping test file %s", path)
				continue
			if is_generated_file(path):
				logger.debug("skipping generated file %s", path)
				continue
			files.append(
				GoFile(
					path=path,
					rel_path=os.path.relpath(path, root),
					package_dir=os.path.relpath(dirpath, root),
				)
			)
	return files
