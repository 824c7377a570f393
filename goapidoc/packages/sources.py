"""Tree-sitter parsing of Go sources and the per-directory compilation unit cache."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import SourceParseError
from ..models import FunctionDeclaration

GO_LANGUAGE = Language(tree_sitter_go.language())

_RECEIVER_NAME = re.compile(r"^\*?\s*([A-Za-z_][A-Za-z0-9_]*)")


@dataclass
class CompilationUnit:
    """One parsed Go file, comments retained."""

    path: Path
    package_name: str
    root: Node
    source: bytes

    def text(self, node: Node) -> str:
        return node_text(node, self.source)


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def is_source_file(path: Path) -> bool:
    """Go sources only: hidden files and ``_test.go`` files are excluded."""
    name = path.name
    return (
        not path.is_dir()
        and not name.startswith(".")
        and name.endswith(".go")
        and not name.endswith("_test.go")
    )


class GoSourceParser:
    """Parses Go files with tree-sitter, treating any syntax error as fatal."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(GO_LANGUAGE)
        return self._parser

    def parse_file(self, path: Path) -> CompilationUnit:
        try:
            source = path.read_bytes()
        except OSError as exc:
            raise SourceParseError(f"Can not read {path}: {exc}") from exc
        return self.parse(source, path)

    def parse(self, source: bytes, path: Path) -> CompilationUnit:
        tree = self._get_parser().parse(source)
        root = tree.root_node
        if root.has_error:
            line = _first_error_line(root)
            raise SourceParseError(f"Parse of {path} failed: syntax error near line {line}")
        return CompilationUnit(
            path=path,
            package_name=_package_name(root, source),
            root=root,
            source=source,
        )


class SourceUnitCache:
    """Parses each package directory once and serves the cached units afterwards."""

    def __init__(self, parser: GoSourceParser | None = None) -> None:
        self._parser = parser or GoSourceParser()
        self._units: Dict[str, Tuple[CompilationUnit, ...]] = {}

    def __contains__(self, real_path: object) -> bool:
        return str(real_path) in self._units

    def units_of(self, real_path: Path) -> Tuple[CompilationUnit, ...]:
        key = str(real_path)
        cached = self._units.get(key)
        if cached is not None:
            return cached

        try:
            entries = sorted(real_path.iterdir())
        except OSError as exc:
            raise SourceParseError(f"Parse of {real_path} pkg cause error: {exc}") from exc

        units = tuple(
            self._parser.parse_file(entry) for entry in entries if is_source_file(entry)
        )
        self._units[key] = units
        return units

    def parse_file(self, path: Path) -> CompilationUnit:
        """Parse a single file outside the directory cache."""
        return self._parser.parse_file(path)


def iter_comments(unit: CompilationUnit) -> Iterator[Node]:
    """Yield every comment node of the unit in source order."""
    stack: List[Node] = [unit.root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            yield node
            continue
        stack.extend(reversed(node.children))


def comment_text(raw: str) -> str:
    """Strip comment markers the way Go's CommentGroup.Text does for one comment."""
    if raw.startswith("//"):
        text = raw[2:]
        if text.startswith(" "):
            text = text[1:]
        return text.rstrip()
    if raw.startswith("/*"):
        body = raw[2:-2] if raw.endswith("*/") else raw[2:]
        lines = [line.rstrip() for line in body.split("\n")]
        return "\n".join(lines).strip("\n")
    return raw.rstrip()


def comment_lines(unit: CompilationUnit) -> Iterator[str]:
    for comment in iter_comments(unit):
        yield from comment_text(unit.text(comment)).split("\n")


def doc_comments(node: Node) -> List[Node]:
    """Return the comment group that ends on the line directly above ``node``."""
    comments: List[Node] = []
    expected_row = node.start_point[0]
    sibling = node.prev_named_sibling
    while (
        sibling is not None
        and sibling.type == "comment"
        and sibling.end_point[0] == expected_row - 1
    ):
        comments.append(sibling)
        expected_row = sibling.start_point[0]
        sibling = sibling.prev_named_sibling
    comments.reverse()
    return comments


def iter_functions(unit: CompilationUnit) -> Iterator[FunctionDeclaration]:
    """Yield top-level functions and methods of the unit."""
    for child in unit.root.named_children:
        if child.type not in {"function_declaration", "method_declaration"}:
            continue
        name_node = child.child_by_field_name("name")
        if name_node is None:
            continue
        receiver = None
        if child.type == "method_declaration":
            receiver = _receiver_type(unit, child)
        yield FunctionDeclaration(
            name=unit.text(name_node),
            receiver=receiver,
            doc_comments=[unit.text(comment) for comment in doc_comments(child)],
            file=str(unit.path),
            line=child.start_point[0] + 1,
        )


def _receiver_type(unit: CompilationUnit, method: Node) -> Optional[str]:
    receiver = method.child_by_field_name("receiver")
    if receiver is None:
        return None
    for parameter in receiver.named_children:
        if parameter.type != "parameter_declaration":
            continue
        type_node = parameter.child_by_field_name("type")
        if type_node is None:
            return None
        match = _RECEIVER_NAME.match(unit.text(type_node))
        return match.group(1) if match else None
    return None


def _package_name(root: Node, source: bytes) -> str:
    for child in root.named_children:
        if child.type != "package_clause":
            continue
        for part in child.named_children:
            if part.type == "package_identifier":
                return node_text(part, source)
    return ""


def _first_error_line(root: Node) -> int:
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return root.start_point[0] + 1


__all__ = [
    "CompilationUnit",
    "GO_LANGUAGE",
    "GoSourceParser",
    "SourceUnitCache",
    "comment_lines",
    "comment_text",
    "doc_comments",
    "is_source_file",
    "iter_comments",
    "iter_functions",
    "node_text",
]
