from __future__ import annotations

import os
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from godocfix.instrument import InstrumentError, instrument_tree
from godocfix.model import Defect, FixResult, RewriteConfig
from godocfix.rewrite import classify, is_exported, rewrite
from godocfix.summarize import summarize_run

app = FastAPI(title="Godoc Fixer")


class RewriteRequest(BaseModel):
	name: str
	lines: List[str] = []
	config: RewriteConfig = RewriteConfig()


class RewriteResponse(BaseModel):
	name: str
	exported: bool
	defect: Defect
	lines: List[str]


class FixRequest(BaseModel):
	root_path: str
	config: RewriteConfig = RewriteConfig()
	dry_run: bool = False


@app.post("/rewrite", response_model=RewriteResponse)
def rewrite_comment(req: RewriteRequest) -> RewriteResponse:
	exported = is_exported(req.name)
	return RewriteResponse(
		name=req.name,
		exported=exported,
		defect=classify(req.name, req.lines),
		lines=rewrite(req.name, exported, req.lines, req.config),
	)


@app.post("/fix", response_model=FixResult)
def fix(req: FixRequest) -> FixResult:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	try:
		report = instrument_tree(root, req.config, dry_run=req.dry_run)
	except InstrumentError as e:
		raise HTTPException(status_code=422, detail=str(e))
	return FixResult(report=report, summaries=summarize_run(report))


def create_app() -> FastAPI:
	return app
