"""Discovers every package below a set of root package identifiers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Set

from ..config import DEFAULT_EXCLUDED_DIRS
from ..logging import get_logger
from .locator import PackageLocator


def _iter_directories(root: Path, excluded_dirs: Set[str]) -> Iterator[Path]:
    for dirpath, dirnames, _ in os.walk(root):
        current_dir = Path(dirpath)
        if current_dir == root:
            dirnames[:] = [name for name in dirnames if name not in excluded_dirs]
        dirnames.sort()
        yield current_dir


class PackageUniverseScanner:
    """Walks the directory tree of each root and registers subordinate packages.

    A directory becomes a package when its absolute path contains the root
    identifier; the identifier is the path sliced from the first occurrence of
    that substring.
    """

    def __init__(
        self,
        locator: PackageLocator,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    ) -> None:
        self._locator = locator
        self._excluded_dirs = set(excluded_dirs)
        self.logger = get_logger("packages.scanner")

    def scan(self, roots: Sequence[str]) -> List[str]:
        """Return the roots and their discovered packages, deduplicated in first-seen order."""
        discovered: List[str] = []
        seen: Set[str] = set()

        for root in roots:
            root = root.strip()
            if not root or root in seen:
                continue
            seen.add(root)
            discovered.append(root)

            real_path = self._locator.resolve(root)
            for directory in _iter_directories(real_path, self._excluded_dirs):
                path = directory.as_posix()
                index = path.find(root)
                if index == -1:
                    continue
                package = path[index:]
                if package not in seen:
                    seen.add(package)
                    discovered.append(package)

        self.logger.debug("Discovered %d packages from %s", len(discovered), ", ".join(roots))
        return discovered


__all__ = ["PackageUniverseScanner"]
