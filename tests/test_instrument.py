import os
from textwrap import dedent

import pytest

from godocfix.instrument import InstrumentError, instrument_source, instrument_tree
from godocfix.model import Defect, RewriteConfig
from godocfix.summarize import summarize_run

TESTDATA = os.path.join(os.path.dirname(__file__), "testdata")


def _read(name):
	with open(os.path.join(TESTDATA, name), "r", encoding="utf-8") as fh:
		return fh.read()


def test_instrument_sample_matches_golden():
	text, fixes, declarations = instrument_source(_read("sample.go"), RewriteConfig())
	assert text == _read("sample.go.golden")
	assert declarations == 17
	assert [f.name for f in fixes] == [
		"Missing",
		"Justname",
		"Server",
		"Run",
		"Stop",
		"Beta",
		"MaxSize",
		"Grouped",
		"First",
		"Third",
		"Floating",
		"PDFLoader",
	]


def test_instrument_is_idempotent():
	golden = _read("sample.go.golden")
	text, fixes, _ = instrument_source(golden, RewriteConfig())
	assert text == golden
	assert fixes == []


def test_auto_description():
	code = dedent(
		"""
		package p

		func NewHTTPClient() {}

		type PDFLoader struct{}
		"""
	)
	text, fixes, _ = instrument_source(code, RewriteConfig(auto_description=True))
	assert "// NewHTTPClient new http client\nfunc NewHTTPClient() {}" in text
	assert "// PDFLoader pdf loader\ntype PDFLoader struct{}" in text
	assert {f.defect for f in fixes} == {Defect.EMPTY}


def test_instrument_tree_writes_in_place(tmp_path):
	(tmp_path / "sample.go").write_text(_read("sample.go"))
	(tmp_path / "sample_test.go").write_text("package sample\n\nfunc TestX() {}\n")
	(tmp_path / "clean.go").write_text("package sample\n\n// Clean is clean.\nfunc Clean() {}\n")

	report = instrument_tree(str(tmp_path), RewriteConfig())

	assert (tmp_path / "sample.go").read_text() == _read("sample.go.golden")
	assert (tmp_path / "sample_test.go").read_text() == "package sample\n\nfunc TestX() {}\n"
	by_path = {f.rel_path: f for f in report.files}
	assert set(by_path) == {"clean.go", "sample.go"}
	assert by_path["sample.go"].written
	assert not by_path["clean.go"].written
	assert by_path["clean.go"].fixes == []

	summaries = summarize_run(report)
	assert "12 comments fixed in 1 files" in summaries.global_overview
	assert "empty: 7" in summaries.global_overview
	assert "just_name: 2" in summaries.global_overview
	assert "missing_name_prefix: 3" in summaries.global_overview
	assert list(summaries.per_file) == ["sample.go"]


def test_instrument_tree_dry_run(tmp_path):
	(tmp_path / "sample.go").write_text(_read("sample.go"))

	report = instrument_tree(str(tmp_path), RewriteConfig(), dry_run=True)

	assert (tmp_path / "sample.go").read_text() == _read("sample.go")
	assert report.dry_run
	assert len(report.files[0].fixes) == 12
	assert not report.files[0].written


def test_instrument_tree_stops_on_parse_error(tmp_path):
	(tmp_path / "bad.go").write_text("package p\n\nfunc (\n")
	with pytest.raises(InstrumentError, match="bad.go"):
		instrument_tree(str(tmp_path), RewriteConfig())


def test_instrument_tree_requires_directory(tmp_path):
	with pytest.raises(InstrumentError):
		instrument_tree(str(tmp_path / "missing"), RewriteConfig())


@pytest.mark.parametrize(
	"code",
	[
		"package p\n\nvar x = 1; func F() {}\n",
		"package p\n\nconst (A = 1\n\tB = 2\n)\n",
		"package p\n\n// F does.\nfunc F() {\n\tconst Max = 3\n\t_ = Max\n}\n",
	],
)
def test_second_run_changes_nothing(code):
	once, fixes, _ = instrument_source(code, RewriteConfig())
	assert fixes
	twice, again, _ = instrument_source(once, RewriteConfig())
	assert twice == once
	assert again == []


def test_local_const_gets_comment():
	code = "package p\n\n// F does.\nfunc F() {\n\tconst Max = 3\n\t_ = Max\n}\n"
	text, fixes, _ = instrument_source(code, RewriteConfig())
	assert text == "package p\n\n// F does.\nfunc F() {\n\t// Max missing godoc.\n\tconst Max = 3\n\t_ = Max\n}\n"
	assert [(f.name, f.kind, f.line) for f in fixes] == [("Max", "const", 5)]
