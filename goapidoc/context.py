"""Session state shared by the package builders and the model resolver."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Optional

from .models import ResolvedPackage, TypeDefinition
from .packages.locator import PackageLocator
from .packages.sources import SourceUnitCache

# Environment-reserved or virtual packages that have no source tree to scan.
DEFAULT_IGNORED_PACKAGES: FrozenSet[str] = frozenset(
    {"C", "appengine/cloudsql", "appengine/datastore"}
)

SymbolTable = Dict[str, TypeDefinition]
ImportMap = Dict[str, str]


class ScanContext:
    """Owns every cache of one scanning session.

    Symbol tables and import maps are keyed by the package's real path, so two
    identifiers that resolve to the same directory share one entry.
    """

    def __init__(
        self,
        locator: PackageLocator | None = None,
        sources: SourceUnitCache | None = None,
        *,
        ignored_packages: Iterable[str] = (),
    ) -> None:
        self.locator = locator or PackageLocator()
        self.sources = sources or SourceUnitCache()
        self.symbol_tables: Dict[str, SymbolTable] = {}
        self.import_maps: Dict[str, ImportMap] = {}
        self.ignored_packages: FrozenSet[str] = DEFAULT_IGNORED_PACKAGES | frozenset(
            ignored_packages
        )

    def package(self, identifier: str) -> ResolvedPackage:
        identifier = identifier.strip('"')
        return ResolvedPackage(identifier=identifier, real_path=self.locator.resolve(identifier))

    def is_ignored(self, identifier: str) -> bool:
        return identifier in self.ignored_packages

    def symbols_for(self, identifier: str) -> Optional[SymbolTable]:
        """Return the built symbol table of a package, or None when absent."""
        real_path = self.locator.check(identifier)
        if real_path is None:
            return None
        return self.symbol_tables.get(str(real_path))

    def imports_for(self, identifier: str) -> Optional[ImportMap]:
        real_path = self.locator.check(identifier)
        if real_path is None:
            return None
        return self.import_maps.get(str(real_path))


__all__ = ["DEFAULT_IGNORED_PACKAGES", "ImportMap", "ScanContext", "SymbolTable"]
