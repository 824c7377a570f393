"""Symbol table builder: top-level type declarations per package."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional, Set

from tree_sitter import Node

from ..logging import get_logger
from ..models import FieldDefinition, TypeDefinition
from .imports import ImportMapBuilder
from .sources import CompilationUnit, comment_text, doc_comments, iter_functions

if TYPE_CHECKING:
    from ..context import ScanContext, SymbolTable

_TYPE_KINDS = {
    "struct_type": "struct",
    "interface_type": "interface",
}


def iter_type_definitions(unit: CompilationUnit) -> Iterator[TypeDefinition]:
    """Yield every top-level type declared in the unit."""
    for declaration in unit.root.named_children:
        if declaration.type != "type_declaration":
            continue
        group_doc = _doc_text(unit, declaration)
        for spec in declaration.named_children:
            if spec.type not in {"type_spec", "type_alias"}:
                continue
            name_node = spec.child_by_field_name("name")
            type_node = spec.child_by_field_name("type")
            if name_node is None or type_node is None:
                continue
            if spec.type == "type_alias":
                kind = "alias"
            else:
                kind = _TYPE_KINDS.get(type_node.type, "named")
            yield TypeDefinition(
                name=unit.text(name_node),
                kind=kind,
                type_expr=unit.text(type_node),
                file=str(unit.path),
                line=spec.start_point[0] + 1,
                fields=_struct_fields(unit, type_node) if kind == "struct" else [],
                doc=_doc_text(unit, spec) or group_doc,
            )


def _struct_fields(unit: CompilationUnit, struct_node: Node) -> List[FieldDefinition]:
    fields: List[FieldDefinition] = []
    for field_list in struct_node.named_children:
        if field_list.type != "field_declaration_list":
            continue
        for declaration in field_list.named_children:
            if declaration.type != "field_declaration":
                continue
            type_node = declaration.child_by_field_name("type")
            if type_node is None:
                continue
            names = [unit.text(node) for node in declaration.children_by_field_name("name")]
            tag_node = declaration.child_by_field_name("tag")
            type_expr = unit.text(type_node)
            embedded = not names
            if embedded and any(child.type == "*" for child in declaration.children):
                type_expr = "*" + type_expr
            fields.append(
                FieldDefinition(
                    names=names,
                    type_expr=type_expr,
                    tag=_unquote(unit.text(tag_node)) if tag_node is not None else "",
                    embedded=embedded,
                )
            )
    return fields


def _unquote(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "`\"":
        return literal[1:-1]
    return literal


def _doc_text(unit: CompilationUnit, node: Node) -> str:
    return "\n".join(comment_text(unit.text(comment)) for comment in doc_comments(node))


class SymbolTableBuilder:
    """Builds symbol tables and warms the tables of every transitive import."""

    def __init__(
        self, context: "ScanContext", imports: ImportMapBuilder | None = None
    ) -> None:
        self._context = context
        self._imports = imports or ImportMapBuilder(context)
        self.logger = get_logger("packages.symbols")

    def build(self, identifier: str, _visited: Optional[Set[str]] = None) -> "SymbolTable":
        """Populate the symbol table of ``identifier`` and of its import closure.

        ``_visited`` holds the real paths already walked by the current call so
        that import cycles terminate.
        """
        context = self._context
        package = context.package(identifier)
        visited = set() if _visited is None else _visited
        visited.add(package.key)

        table = context.symbol_tables.setdefault(package.key, {})
        units = context.sources.units_of(package.real_path)
        for unit in units:
            for definition in iter_type_definitions(unit):
                table[definition.name] = definition
        for unit in units:
            for function in iter_functions(unit):
                if function.name == "MarshalJSON" and function.receiver in table:
                    table[function.receiver].marshals_json = True
        self.logger.debug("Built %d type definitions for %s", len(table), package.identifier)

        for imported in self._imports.build(package.identifier).unresolved:
            if str(context.locator.resolve(imported)) in visited:
                continue
            self.build(imported, visited)
        return table


__all__ = ["SymbolTableBuilder", "iter_type_definitions"]
