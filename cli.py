from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from godocfix.instrument import InstrumentError, instrument_tree
from godocfix.model import DEFAULT_COMMENT_FORMAT, FixResult, RewriteConfig
from godocfix.summarize import summarize_run

logger = logging.getLogger("godocfix")


def cmd_fix(args: argparse.Namespace) -> int:
	root = os.path.abspath(args.code_path or os.getcwd())
	try:
		config = RewriteConfig(format=args.format, auto_description=args.auto_description)
	except ValidationError as e:
		logger.error("invalid comment format %r: %s", args.format, e.errors()[0]["msg"])
		return 1
	try:
		report = instrument_tree(root, config, dry_run=args.dry_run)
	except InstrumentError as e:
		logger.error("error while instrumenting %s: %s", root, e)
		return 1

	summaries = summarize_run(report)
	if args.json:
		print(json.dumps(FixResult(report=report, summaries=summaries).model_dump(mode="json"), indent=2))
	else:
		print(summaries.global_overview)
		for text in summaries.per_file.values():
			print(text)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="godocfix")
	parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
	sub = parser.add_subparsers(dest="cmd", required=True)

	pf = sub.add_parser("fix", help="Add or fix godoc comments of exported declarations in place")
	pf.add_argument("--code-path", default="", help="Root of the Go sources (default: current directory)")
	pf.add_argument("--format", default=DEFAULT_COMMENT_FORMAT, help="Comment format, one %%s for the name")
	pf.add_argument("--auto-description", action="store_true", help="Describe names by splitting them into words")
	pf.add_argument("--dry-run", action="store_true", help="Report the fixes without writing files")
	pf.add_argument("--json", action="store_true", help="Print the full report as JSON")
	pf.set_defaults(func=cmd_fix)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> None:
	args = build_parser().parse_args(argv)
	logging.basicConfig(
		level=getattr(logging, args.log_level),
		format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
	)
	code = args.func(args)
	if code:
		sys.exit(code)


if __name__ == "__main__":
	main()
