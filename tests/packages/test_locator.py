"""Tests for goapidoc.packages.locator."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from goapidoc.errors import ConfigurationError, ResolutionError
from goapidoc.packages import locator as locator_module
from goapidoc.packages.locator import PackageLocator


def test_locator_returns_first_matching_root(tmp_path: Path) -> None:
    first = tmp_path / "first" / "src"
    second = tmp_path / "second" / "src"
    (first / "acme" / "billing").mkdir(parents=True)
    (second / "acme" / "billing").mkdir(parents=True)

    locator = PackageLocator([first, second])

    assert locator.resolve("acme/billing") == (first / "acme" / "billing").resolve()


def test_locator_falls_back_to_toolchain_root(go_tree) -> None:
    go_tree.write("net/http", {"server.go": "package http\n"}, toolchain=True)

    locator = go_tree.locator()

    assert locator.resolve("net/http") == (go_tree.goroot / "src" / "net" / "http").resolve()


def test_locator_strips_import_quotes(go_tree) -> None:
    go_tree.write("acme/billing", {"billing.go": "package billing\n"})

    assert go_tree.locator().check('"acme/billing"') is not None


def test_locator_resolves_symlinks(tmp_path: Path) -> None:
    root = tmp_path / "src"
    target = tmp_path / "elsewhere" / "billing"
    target.mkdir(parents=True)
    (root / "acme").mkdir(parents=True)
    try:
        os.symlink(target, root / "acme" / "billing", target_is_directory=True)
    except (OSError, NotImplementedError):  # pragma: no cover - platform without symlinks
        pytest.skip("symlinks not supported")

    assert PackageLocator([root]).resolve("acme/billing") == target.resolve()


def test_locator_caches_hits_and_misses(go_tree, monkeypatch) -> None:
    go_tree.write("acme/billing", {"billing.go": "package billing\n"})
    calls: list[Path] = []
    real_probe = locator_module._probe_directory

    def _counting_probe(candidate: Path):  # type: ignore[no-untyped-def]
        calls.append(candidate)
        return real_probe(candidate)

    monkeypatch.setattr(locator_module, "_probe_directory", _counting_probe)
    locator = go_tree.locator()

    first = locator.check("acme/billing")
    probes_after_first = len(calls)
    second = locator.check("acme/billing")

    assert first is not None
    assert first is second
    assert len(calls) == probes_after_first

    assert locator.check("acme/missing") is None
    probes_after_miss = len(calls)
    assert locator.check("acme/missing") is None
    assert len(calls) == probes_after_miss


def test_locator_resolve_raises_for_unknown_package(go_tree) -> None:
    with pytest.raises(ResolutionError) as excinfo:
        go_tree.locator().resolve("acme/missing")

    assert "acme/missing" in str(excinfo.value)
    assert excinfo.value.kind == "resolution"


def test_locator_requires_gopath_at_first_lookup() -> None:
    locator = PackageLocator(environ={})

    with pytest.raises(ConfigurationError):
        locator.check("acme/billing")


def test_locator_reads_roots_from_environment(tmp_path: Path) -> None:
    first = tmp_path / "one"
    second = tmp_path / "two"
    goroot = tmp_path / "go"
    environ = {"GOPATH": f"{first}{os.pathsep}{second}", "GOROOT": str(goroot)}

    locator = PackageLocator(environ=environ)

    assert locator.roots == [first / "src", second / "src", goroot / "src"]
