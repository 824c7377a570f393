"""Configuration loading for goapidoc (.goapidoc.yml and the Go environment)."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import ConfigurationError

CONFIG_FILENAME = ".goapidoc.yml"

DEFAULT_EXCLUDED_DIRS = ("Godeps",)

_OUTPUT_FORMATS = {"json", "markdown"}


@dataclass
class ScanConfig:
    """Represents the settings defined in .goapidoc.yml."""

    root: Path
    packages: List[str] = field(default_factory=list)
    main_file: Optional[Path] = None
    base_path: str = ""
    controller_class: str = ""
    output_dir: Optional[Path] = None
    output_format: str = "json"
    ignored_packages: List[str] = field(default_factory=list)
    excluded_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))


def load_config(config_path: Path) -> ScanConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ScanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    main_file = _as_str(data.get("main_file"))
    output_dir = _as_str(data.get("output_dir"))
    output_format = (_as_str(data.get("format")) or "json").lower()
    if output_format not in _OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unsupported output format {output_format!r}; expected one of {sorted(_OUTPUT_FORMATS)}"
        )

    excluded_dirs = _as_str_list(data.get("excluded_dirs"))

    return ScanConfig(
        root=root,
        packages=split_packages(data.get("packages")),
        main_file=root / main_file if main_file else None,
        base_path=_as_str(data.get("base_path")) or "",
        controller_class=_as_str(data.get("controller_class")) or "",
        output_dir=root / output_dir if output_dir else None,
        output_format=output_format,
        ignored_packages=_as_str_list(data.get("ignored_packages")),
        excluded_dirs=excluded_dirs or list(DEFAULT_EXCLUDED_DIRS),
    )


def split_packages(value: Any) -> List[str]:
    """Normalise a comma separated string or list of package identifiers."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else _as_str_list(value)
    return [item.strip() for item in items if item and item.strip()]


def search_roots_from_environment(environ: Mapping[str, str] | None = None) -> List[Path]:
    """Return ordered package search roots: each GOPATH entry, then the toolchain root."""
    env = os.environ if environ is None else environ
    gopath = env.get("GOPATH", "")
    if not gopath:
        raise ConfigurationError("Please, set $GOPATH environment variable")

    roots = [Path(entry) / "src" for entry in gopath.split(os.pathsep) if entry]

    goroot = env.get("GOROOT") or _toolchain_root()
    if goroot:
        roots.append(Path(goroot) / "src")
    return roots


def _toolchain_root() -> Optional[str]:
    go_binary = shutil.which("go")
    if go_binary is None:
        return None
    try:
        completed = subprocess.run(
            [go_binary, "env", "GOROOT"],
            capture_output=True,
            text=True,
            check=False,
            timeout=30,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXCLUDED_DIRS",
    "ScanConfig",
    "load_config",
    "search_roots_from_environment",
    "split_packages",
]
