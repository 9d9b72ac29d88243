from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser

FUNC_DECLS = {
	"function_declaration": "func",
	"method_declaration": "method",
}
GEN_DECLS = {
	"type_declaration": "type",
	"const_declaration": "const",
	"var_declaration": "var",
}
SPEC_TYPES = {"type_spec", "type_alias", "const_spec", "var_spec"}
# Newer grammars wrap grouped var specs in their own node.
SPEC_LISTS = {"var_spec_list"}


class GoParseError(Exception):
	pass


@dataclass
class DocTarget:
	"""One exported-name candidate and the comment block above it."""

	name: str
	kind: str
	line: int
	lines: List[str]
	spans: List[Tuple[int, int]]
	insert_at: int
	indent: bytes
	inline: bool = False


_parser: Optional[Parser] = None


def get_parser() -> Parser:
	global _parser
	if _parser is None:
		_parser = Parser(Language(tsgo.language()))
	return _parser


def node_text(node: Node, source: bytes) -> str:
	return source[node.start_byte:node.end_byte].decode("utf-8")


def _indent_of(node: Node, source: bytes) -> Tuple[bytes, bool]:
	"""Leading whitespace of the node's line, and whether code precedes it."""
	line_start = source.rfind(b"\n", 0, node.start_byte) + 1
	prefix = source[line_start:node.start_byte]
	indent = prefix[:len(prefix) - len(prefix.lstrip())]
	return indent, indent != prefix


def _is_line_comment(node: Node, source: bytes) -> bool:
	return source.startswith(b"//", node.start_byte)


def _children_with_docs(
	children: Sequence[Node], source: bytes, leading: Sequence[Node] = ()
) -> Iterator[Tuple[Node, List[Node]]]:
	"""Yield every named child together with the line comments right above it.

	A block only counts when it is made of "//" comments on consecutive
	lines ending on the line before the child. Trailing comments of a
	previous statement and /* */ comments break the block. ``leading`` is
	a block already collected by the parent, for wrappers such as
	statement_list that start on the line of their first child.
	"""
	block: List[Node] = list(leading)
	code_row = -1
	for child in children:
		if child.type == "comment":
			row = child.start_point[0]
			if row == code_row or not _is_line_comment(child, source):
				block = []
			elif block and block[-1].end_point[0] + 1 == row:
				block.append(child)
			else:
				block = [child]
			continue
		if not child.is_named:
			code_row = child.start_point[0]
			continue
		doc: List[Node] = []
		if block and block[-1].end_point[0] + 1 == child.start_point[0]:
			doc = block
		yield child, doc
		block = []
		code_row = child.end_point[0]


def _make_target(name_node: Node, kind: str, anchor: Node, doc: List[Node], source: bytes) -> DocTarget:
	indent, inline = _indent_of(anchor, source)
	return DocTarget(
		name=node_text(name_node, source),
		kind=kind,
		line=anchor.start_point[0] + 1,
		lines=[node_text(c, source) for c in doc],
		spans=[(c.start_byte, c.end_byte) for c in doc],
		insert_at=anchor.start_byte,
		indent=indent,
		inline=inline,
	)


def _specs(decl: Node) -> List[Node]:
	specs: List[Node] = []
	for child in decl.named_children:
		if child.type in SPEC_TYPES:
			specs.append(child)
		elif child.type in SPEC_LISTS:
			specs.extend(c for c in child.named_children if c.type in SPEC_TYPES)
	return specs


def _group_children(decl: Node) -> List[Node]:
	for child in decl.children:
		if child.type in SPEC_LISTS:
			return child.children
	return decl.children


def _gen_decl_targets(decl: Node, doc: List[Node], source: bytes) -> List[DocTarget]:
	kind = GEN_DECLS[decl.type]
	specs = _specs(decl)
	if len(specs) == 1:
		# One spec: the comment above the keyword documents it.
		name = specs[0].child_by_field_name("name")
		if name is None:
			return []
		return [_make_target(name, kind, decl, doc, source)]

	targets: List[DocTarget] = []
	for spec, spec_doc in _children_with_docs(_group_children(decl), source):
		if spec.type not in SPEC_TYPES:
			continue
		name = spec.child_by_field_name("name")
		if name is not None:
			targets.append(_make_target(name, kind, spec, spec_doc, source))
	return targets


def _first_error(node: Node) -> Optional[Node]:
	if node.type == "ERROR" or node.is_missing:
		return node
	for child in node.children:
		if child.has_error or child.is_missing:
			found = _first_error(child)
			if found is not None:
				return found
	return None


def extract_targets(source: bytes) -> List[DocTarget]:
	"""Collect documentable declarations in source order.

	Functions and methods always yield a target. type/const/var
	declarations, top-level or local to a body, yield one target when they
	hold a single spec, otherwise one per spec of the parenthesized group,
	keyed on the spec's first name.
	"""
	tree = get_parser().parse(source)
	root = tree.root_node
	if root.has_error:
		bad = _first_error(root) or root
		raise GoParseError(f"syntax error at line {bad.start_point[0] + 1}")

	targets: List[DocTarget] = []
	_collect(root, source, targets)
	return targets


def _collect(parent: Node, source: bytes, targets: List[DocTarget], leading: Sequence[Node] = ()) -> None:
	for node, doc in _children_with_docs(parent.children, source, leading):
		if node.type in FUNC_DECLS:
			name = node.child_by_field_name("name")
			if name is not None:
				targets.append(_make_target(name, FUNC_DECLS[node.type], node, doc, source))
		elif node.type in GEN_DECLS:
			targets.extend(_gen_decl_targets(node, doc, source))
			for spec in _specs(node):
				_collect(spec, source, targets)
			continue
		# Local declarations in bodies and function literals.
		_collect(node, source, targets, doc)


def _patches(target: DocTarget, new_lines: Sequence[str]) -> List[Tuple[int, int, bytes]]:
	if len(new_lines) == len(target.lines):
		return [
			(start, end, new.encode("utf-8"))
			for (start, end), old, new in zip(target.spans, target.lines, new_lines)
			if old != new
		]
	if target.lines or len(new_lines) != 1:
		raise ValueError(
			f"cannot splice {len(new_lines)} lines over {len(target.lines)} for {target.name}"
		)
	data = new_lines[0].encode("utf-8") + b"\n" + target.indent
	if target.inline:
		# Code before the declaration on its line: the comment needs its own line.
		data = b"\n" + target.indent + data
	return [(target.insert_at, target.insert_at, data)]


def apply_rewrites(source: bytes, edits: Sequence[Tuple[DocTarget, Sequence[str]]]) -> bytes:
	"""Splice rewritten comment blocks back into ``source``.

	Changed lines are replaced in place; a target without a block gets its
	new head line inserted above the declaration with the same indentation.
	"""
	patches: List[Tuple[int, int, bytes]] = []
	for target, new_lines in edits:
		patches.extend(_patches(target, new_lines))
	out = bytearray(source)
	for start, end, data in sorted(patches, key=lambda p: (p[0], p[1]), reverse=True):
		out[start:end] = data
	return bytes(out)
