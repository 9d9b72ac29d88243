from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_COMMENT_FORMAT = "// %s missing godoc."


class Defect(str, Enum):
	EMPTY = "empty"
	JUST_NAME = "just_name"
	MISSING_NAME_PREFIX = "missing_name_prefix"
	WELL_FORMED = "well_formed"


class RewriteConfig(BaseModel):
	model_config = ConfigDict(frozen=True)

	format: str = DEFAULT_COMMENT_FORMAT
	auto_description: bool = False

	@field_validator("format")
	@classmethod
	def _check_format(cls, value: str) -> str:
		if value.count("%s") != 1:
			raise ValueError("format must contain exactly one %s placeholder")
		try:
			value % "Name"
		except (TypeError, ValueError) as e:
			raise ValueError(f"invalid format {value!r}: {e}") from e
		# Rendered lines must survive a second run untouched.
		if value != "// %s" and not value.startswith("// %s "):
			raise ValueError("format must start with '// %s' followed by a space or nothing")
		return value


class GoFile(BaseModel):
	path: str
	rel_path: str
	package_dir: str


class CommentFix(BaseModel):
	name: str
	kind: str
	line: int
	defect: Defect
	before: List[str] = []
	after: List[str] = []


class FileReport(BaseModel):
	path: str
	rel_path: str
	declarations: int = 0
	fixes: List[CommentFix] = []
	written: bool = False


class RunReport(BaseModel):
	root: str
	config: RewriteConfig
	dry_run: bool = False
	files: List[FileReport] = []


class Summaries(BaseModel):
	global_overview: str
	per_file: Dict[str, str]


class FixResult(BaseModel):
	report: RunReport
	summaries: Summaries
