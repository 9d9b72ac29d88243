from __future__ import annotations

from collections import Counter
from typing import Dict, List

from .model import FileReport, RunReport, Summaries


def summarize_file(f: FileReport) -> str:
	parts: List[str] = []
	verb = "rewrote" if f.written else "would rewrite"
	parts.append(f"File {f.rel_path}: {f.declarations} declarations, {verb} {len(f.fixes)} comments")
	for fix in f.fixes:
		before = fix.before[0] if fix.before else "<none>"
		parts.append(f"  line {fix.line} {fix.kind} {fix.name}: {before} -> {fix.after[0]}")
	return "\n".join(parts)


def summarize_run(report: RunReport) -> Summaries:
	per_file: Dict[str, str] = {}
	for f in report.files:
		if f.fixes:
			per_file[f.rel_path] = summarize_file(f)

	defects = Counter(fix.defect.value for f in report.files for fix in f.fixes)
	fix_count = sum(defects.values())
	global_overview = (
		f"Go sources at {report.root}: {len(report.files)} files, "
		f"{sum(f.declarations for f in report.files)} declarations, "
		f"{fix_count} comments {'to fix' if report.dry_run else 'fixed'} "
		f"in {len(per_file)} files"
	)
	if defects:
		global_overview += " (" + ", ".join(f"{k}: {v}" for k, v in sorted(defects.items())) + ")"

	return Summaries(
		global_overview=global_overview,
		per_file=per_file,
	)
