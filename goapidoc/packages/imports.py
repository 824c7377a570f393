"""Import map builder: local alias to fully-qualified package identifier."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, List

from ..models import ImportSpec
from .sources import CompilationUnit

if TYPE_CHECKING:
    from ..context import ScanContext

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class ImportScan:
    """Result of scanning a package's import statements."""

    aliases: Dict[str, str] = field(default_factory=dict)
    unresolved: List[str] = field(default_factory=list)


def iter_import_specs(unit: CompilationUnit) -> Iterator[ImportSpec]:
    """Yield import specs of a unit, grouped or not, in source order."""
    for declaration in unit.root.named_children:
        if declaration.type != "import_declaration":
            continue
        for child in declaration.named_children:
            specs = child.named_children if child.type == "import_spec_list" else [child]
            for spec in specs:
                if spec.type != "import_spec":
                    continue
                path_node = spec.child_by_field_name("path")
                if path_node is None:
                    continue
                name_node = spec.child_by_field_name("name")
                yield ImportSpec(
                    path=unit.text(path_node).strip('"`'),
                    name=unit.text(name_node) if name_node is not None else None,
                    line=spec.start_point[0] + 1,
                )


def import_alias(spec: ImportSpec) -> str | None:
    """Local name an import is referenced by; None for blank imports."""
    if spec.name == "_":
        return None
    if spec.name and _IDENTIFIER.match(spec.name):
        return spec.name
    return spec.path.split("/")[-1]


class ImportMapBuilder:
    """Builds the per-package import map, replacing any previous map for the package."""

    def __init__(self, context: "ScanContext") -> None:
        self._context = context

    def build(self, identifier: str) -> ImportScan:
        context = self._context
        package = context.package(identifier)

        scan = ImportScan()
        for unit in context.sources.units_of(package.real_path):
            for spec in iter_import_specs(unit):
                if context.is_ignored(spec.path):
                    continue
                # Resolved eagerly so an unknown import fails here, before any lookup.
                real_path = context.locator.resolve(spec.path)
                if str(real_path) not in context.symbol_tables and spec.path not in scan.unresolved:
                    scan.unresolved.append(spec.path)

                alias = import_alias(spec)
                if alias is not None:
                    scan.aliases[alias] = spec.path

        context.import_maps[package.key] = scan.aliases
        return scan


__all__ = ["ImportMapBuilder", "ImportScan", "import_alias", "iter_import_specs"]
