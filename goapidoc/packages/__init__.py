"""Package traversal for Go source trees.

Modules:
- locator.py: package identifier to real directory, cached.
- sources.py: tree-sitter parsing and the per-directory unit cache.
- imports.py: import map builder.
- symbols.py: symbol table builder with transitive import warm-up.
- scanner.py: package universe discovery below root identifiers.
"""

from .locator import PackageLocator
from .scanner import PackageUniverseScanner
from .sources import CompilationUnit, GoSourceParser, SourceUnitCache

__all__ = [
    "CompilationUnit",
    "GoSourceParser",
    "PackageLocator",
    "PackageUniverseScanner",
    "SourceUnitCache",
]
