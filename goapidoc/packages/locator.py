"""Maps Go package identifiers to canonical directories across search roots."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from ..config import search_roots_from_environment
from ..errors import ResolutionError


def _probe_directory(candidate: Path) -> Optional[Path]:
    """Return the symlink-resolved path when it exists."""
    try:
        return candidate.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


class PackageLocator:
    """Resolves package identifiers against ordered search roots, first match wins.

    Results are memoised permanently per raw identifier, misses included, so a
    package is probed on the filesystem at most once per session.
    """

    def __init__(
        self,
        roots: Sequence[Path] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._roots: Optional[List[Path]] = list(roots) if roots is not None else None
        self._environ = environ
        self._cache: Dict[str, Optional[Path]] = {}

    @property
    def roots(self) -> List[Path]:
        # Resolved lazily: a missing $GOPATH only matters once a lookup needs it.
        if self._roots is None:
            self._roots = search_roots_from_environment(self._environ)
        return list(self._roots)

    def check(self, identifier: str) -> Optional[Path]:
        """Return the real path for ``identifier`` or None when no root contains it."""
        identifier = identifier.strip('"')
        if identifier in self._cache:
            return self._cache[identifier]

        real_path: Optional[Path] = None
        for root in self.roots:
            real_path = _probe_directory(root / identifier)
            if real_path is not None:
                break

        self._cache[identifier] = real_path
        return real_path

    def resolve(self, identifier: str) -> Path:
        """Like :meth:`check`, but an unknown package is fatal."""
        identifier = identifier.strip('"')
        real_path = self.check(identifier)
        if real_path is None:
            raise ResolutionError(f"Can not find package {identifier}")
        return real_path


__all__ = ["PackageLocator"]
