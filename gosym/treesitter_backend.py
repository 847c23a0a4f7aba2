"""Tree-sitter backed parsing engine for Go source directories.

This module defines :class:`TreeSitterBackend`, which wraps the
``tree_sitter`` bindings and the ``tree_sitter_go`` grammar to turn a
directory of Go files into the :mod:`gosym.model` source tree.  Only
the information the generator needs is kept: the package clause of
each file, the names introduced by every top level ``const``, ``var``,
``type`` and ``func`` declaration, and the doc comments attached to
those declarations.

Doc comments follow the rules of Go's own parser.  A comment group is
a run of comments with no blank line between them; it documents a
declaration (or a spec inside a parenthesised declaration) when it
starts on its own line and ends on the line directly above it.
Trailing line comments never count as documentation.

Any syntax error reported by tree-sitter aborts the whole directory
with :class:`gosym.errors.ParseError`; there is no partial result.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .errors import ParseError
from .filters import list_go_files
from .model import (
    ConstGroup,
    Declaration,
    DeclSpec,
    FuncDef,
    Package,
    SourceFile,
    SourceTree,
    TypeDef,
    VarGroup,
)

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# Comments such as //go:generate or //line are tool directives, not prose.
_DIRECTIVE = re.compile(r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")

# Newer grammar versions wrap parenthesised specs in a list node.
_SPEC_LISTS = frozenset({"const_spec_list", "var_spec_list", "type_spec_list"})


class TreeSitterBackend:
    """Parse Go package directories into :class:`gosym.model.Package` objects.

    A single instance may be reused for any number of directories; the
    underlying parser keeps no state between calls.
    """

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse_dir(self, directory: str) -> SourceTree:
        """Parse every eligible ``.go`` file in ``directory``.

        Returns:
            A mapping from package name to :class:`Package`.  Files that
            declare different packages (``foo`` and ``foo_test``, or a
            ``main`` helper) end up under different keys.

        Raises:
            ParseError: If the directory cannot be read or any file in
                it fails to parse.
        """
        try:
            paths = list_go_files(directory)
        except OSError as exc:
            raise ParseError(directory, f"cannot read directory: {exc.strerror or exc}") from exc

        tree: SourceTree = {}
        for path in paths:
            source = self.parse_file(path)
            package = tree.get(source.package)
            if package is None:
                package = tree[source.package] = Package(source.package)
            package.add_file(source)
        logger.debug("Parsed %d file(s) in %s: packages %s", len(paths), directory, sorted(tree))
        return tree

    def parse_file(self, path: str) -> SourceFile:
        """Read and parse a single Go file."""
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise ParseError(path, f"cannot read file: {exc.strerror or exc}") from exc
        return self.parse_source(data, path)

    def parse_source(self, data: bytes, path: str = "<source>") -> SourceFile:
        """Parse Go source held in memory.

        ``path`` is only used for error messages and bookkeeping.
        """
        root = self._parser.parse(data).root_node
        if root.has_error:
            node = _first_error(root)
            if node.is_missing:
                message = f"missing {node.type}"
            else:
                snippet = _node_text(node, data).splitlines()
                message = f"syntax error near {snippet[0].strip()!r}" if snippet else "syntax error"
            row, column = node.start_point
            raise ParseError(path, message, line=row + 1, column=column + 1)

        package = _package_name(root, data)
        if package is None:
            raise ParseError(path, "expected 'package' clause", line=1, column=1)

        declarations: List[Declaration] = []
        for child in root.named_children:
            declaration = self._convert_declaration(child, data, path)
            if declaration is not None:
                declarations.append(declaration)
        return SourceFile(path=path, package=package, declarations=declarations)

    # ------------------------------------------------------------------
    # Internal helpers

    def _convert_declaration(self, node: Node, data: bytes, path: str) -> Optional[Declaration]:
        kind = node.type
        doc = doc_comment(node, data)
        line = node.start_point[0] + 1
        if kind == "const_declaration":
            return ConstGroup(doc=doc, path=path, line=line, specs=self._specs(node, {"const_spec"}, data))
        if kind == "var_declaration":
            return VarGroup(doc=doc, path=path, line=line, specs=self._specs(node, {"var_spec"}, data))
        if kind == "type_declaration":
            return TypeDef(doc=doc, path=path, line=line, specs=self._specs(node, {"type_spec", "type_alias"}, data))
        if kind in ("function_declaration", "method_declaration"):
            name = node.child_by_field_name("name")
            return FuncDef(
                doc=doc,
                path=path,
                line=line,
                name=_node_text(name, data) if name is not None else "",
                is_method=kind == "method_declaration",
            )
        return None

    def _specs(self, node: Node, kinds: Iterable[str], data: bytes) -> List[DeclSpec]:
        specs: List[DeclSpec] = []
        for child in node.named_children:
            if child.type in _SPEC_LISTS:
                specs.extend(self._specs(child, kinds, data))
            elif child.type in kinds:
                names = [
                    _node_text(n, data) for n in child.children_by_field_name("name") if n.is_named
                ]
                specs.append(DeclSpec(names=names, doc=doc_comment(child, data), line=child.start_point[0] + 1))
        return specs


def doc_comment(node: Node, data: bytes) -> Optional[str]:
    """Return the text of the doc comment group above ``node``, if any."""
    group: List[Node] = []
    boundary = node.start_point[0]
    current = node.prev_named_sibling
    while current is not None and current.type == "comment":
        end_row = current.end_point[0]
        if group:
            # Part of the same group only if no blank line separates them.
            if end_row + 1 < boundary:
                break
        elif end_row + 1 != boundary:
            break
        if not _on_own_line(current, data):
            break
        group.append(current)
        boundary = current.start_point[0]
        current = current.prev_named_sibling
    if not group:
        return None
    return comment_text(_node_text(c, data) for c in reversed(group))


def comment_text(comments: Iterable[str]) -> str:
    """Strip comment markers the way Go's ``CommentGroup.Text`` does.

    Leading and trailing blank lines are removed, runs of blank lines are
    collapsed, and directive comments (``//go:embed``) are dropped.
    """
    lines: List[str] = []
    for raw in comments:
        if raw.startswith("//"):
            body = raw[2:]
            if body.startswith(" "):
                body = body[1:]
            elif _DIRECTIVE.match(body):
                continue
        else:
            body = raw[2:-2]
        lines.extend(body.split("\n"))

    text: List[str] = []
    for line in lines:
        line = line.rstrip()
        if line or (text and text[-1]):
            text.append(line)
    while text and not text[-1]:
        text.pop()
    return "\n".join(text) + "\n" if text else ""


def _package_name(root: Node, data: bytes) -> Optional[str]:
    for child in root.named_children:
        if child.type != "package_clause":
            continue
        for name in child.named_children:
            if name.type in ("package_identifier", "identifier"):
                return _node_text(name, data)
    return None


def _first_error(root: Node) -> Node:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return root


def _on_own_line(node: Node, data: bytes) -> bool:
    line_start = data.rfind(b"\n", 0, node.start_byte) + 1
    return not data[line_start:node.start_byte].strip()


def _node_text(node: Node, data: bytes) -> str:
    return data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
