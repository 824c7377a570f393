"""Resolves model references to their owning package and type definition."""

from __future__ import annotations

from typing import Optional, Tuple

from .context import ScanContext
from .errors import ResolutionError
from .models import TypeDefinition


class ModelResolver:
    """Resolves ``Type``, ``alias.Type`` and ``path/to/pkg.Type`` references.

    Order matters: a qualified reference is first tried as an absolute package
    path, and only a two-part reference falls back to the import aliases of the
    referencing package. An absolute package that happens to share its name with
    an alias therefore always wins.
    """

    def __init__(self, context: ScanContext) -> None:
        self._context = context

    def lookup(self, name: str, package: str) -> Optional[TypeDefinition]:
        table = self._context.symbols_for(package)
        if table is None:
            return None
        return table.get(name)

    def resolve(self, reference: str, package: str) -> Tuple[TypeDefinition, str]:
        """Return the definition and the identifier of the package that owns it."""
        parts = reference.split(".")

        if len(parts) == 1:
            definition = self.lookup(reference, package)
            if definition is None:
                raise ResolutionError(
                    f"Can not find definition of {reference} model. Current package {package}"
                )
            return definition, package

        absolute_package = "/".join(parts[:-1])
        name = parts[-1]
        definition = self.lookup(name, absolute_package)
        if definition is not None:
            return definition, absolute_package

        if len(parts) > 2:
            raise ResolutionError(
                f"Can not find definition of {name} model. Name looks like absolute, "
                f"but model not found in {absolute_package} package"
            )

        imports = self._context.imports_for(package)
        if imports is None:
            raise ResolutionError(
                f"Can not find definition of {name} model. Package {package} dont import anything"
            )
        aliased_package = imports.get(parts[0])
        if aliased_package is None:
            raise ResolutionError(
                f"Package {parts[0]} is not imported to {package}, Imported: {sorted(imports)}"
            )
        definition = self.lookup(name, aliased_package)
        if definition is None:
            raise ResolutionError(
                f"Can not find definition of {name} model in package {aliased_package}"
            )
        return definition, aliased_package


__all__ = ["ModelResolver"]
