"""Adds or fixes godoc comments on exported Go declarations.

Modules:
- segment.py: Splitting identifiers into words for generated descriptions.
- rewrite.py: Classifying a doc comment block and rewriting its head line.
- model.py: Configuration and report models.
- fs_scan.py: Filesystem scanning with vendor/test/generated filters.
- go_parse.py: tree-sitter extraction of declarations and comment splicing.
- instrument.py: Applying rewrites to sources, files and directory trees.
- summarize.py: Deterministic textual summaries of a run.
"""

__all__ = [
	"segment",
	"rewrite",
	"model",
	"fs_scan",
	"go_parse",
	"instrument",
	"summarize",
]
