"""Tests for goapidoc.packages.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from goapidoc.errors import ResolutionError
from goapidoc.packages.locator import PackageLocator
from goapidoc.packages.scanner import PackageUniverseScanner


def test_scan_discovers_nested_packages_in_order(go_tree) -> None:
    go_tree.write("acme/shop", {"main.go": "package main\n"})
    go_tree.write("acme/shop/orders", {"orders.go": "package orders\n"})
    go_tree.write("acme/shop/orders/v2", {"orders.go": "package v2\n"})
    go_tree.write("acme/shop/billing", {"billing.go": "package billing\n"})

    packages = PackageUniverseScanner(go_tree.locator()).scan(["acme/shop"])

    assert packages == [
        "acme/shop",
        "acme/shop/billing",
        "acme/shop/orders",
        "acme/shop/orders/v2",
    ]


def test_scan_deduplicates_roots_and_subpackages(go_tree) -> None:
    go_tree.write("acme/shop/orders", {"orders.go": "package orders\n"})
    go_tree.write("acme/tools", {"tools.go": "package tools\n"})

    packages = PackageUniverseScanner(go_tree.locator()).scan(
        ["acme/shop", "", "acme/shop/orders", "acme/tools", "acme/shop"]
    )

    assert packages == ["acme/shop", "acme/shop/orders", "acme/tools"]


def test_scan_skips_dependency_snapshots_at_root_only(go_tree) -> None:
    go_tree.write("acme/shop", {"main.go": "package main\n"})
    go_tree.write("acme/shop/Godeps/_workspace/src/lib", {"lib.go": "package lib\n"})
    go_tree.write("acme/shop/api/Godeps", {"deps.go": "package deps\n"})

    packages = PackageUniverseScanner(go_tree.locator()).scan(["acme/shop"])

    assert packages == ["acme/shop", "acme/shop/api", "acme/shop/api/Godeps"]


def test_scan_registers_hidden_directories(go_tree) -> None:
    go_tree.write("acme/shop", {"main.go": "package main\n"})
    go_tree.write("acme/shop/.gen/api", {"api.go": "package api\n"})
    go_tree.write("acme/shop/api", {"api.go": "package api\n"})

    packages = PackageUniverseScanner(go_tree.locator()).scan(["acme/shop"])

    assert packages == ["acme/shop", "acme/shop/.gen", "acme/shop/.gen/api", "acme/shop/api"]


def test_hidden_directories_can_be_excluded_by_config(go_tree) -> None:
    go_tree.write("acme/shop/.gen/api", {"api.go": "package api\n"})
    go_tree.write("acme/shop/api", {"api.go": "package api\n"})

    scanner = PackageUniverseScanner(go_tree.locator(), excluded_dirs=["Godeps", ".gen"])

    assert scanner.scan(["acme/shop"]) == ["acme/shop", "acme/shop/api"]


def test_scan_honours_configured_excluded_dirs(go_tree) -> None:
    go_tree.write("acme/shop/vendor/lib", {"lib.go": "package lib\n"})
    go_tree.write("acme/shop/api", {"api.go": "package api\n"})

    scanner = PackageUniverseScanner(go_tree.locator(), excluded_dirs=["vendor"])

    assert scanner.scan(["acme/shop"]) == ["acme/shop", "acme/shop/api"]


def test_scan_slices_identifier_at_first_substring_match(tmp_path: Path) -> None:
    # The workspace itself lives below a directory spelled like the root identifier.
    root = tmp_path / "acme" / "shop" / "gopath" / "src"
    (root / "acme" / "shop" / "api").mkdir(parents=True)

    packages = PackageUniverseScanner(PackageLocator([root])).scan(["acme/shop"])

    assert packages[0] == "acme/shop"
    assert packages[1] == "acme/shop/gopath/src/acme/shop"
    assert packages[2] == "acme/shop/gopath/src/acme/shop/api"


def test_scan_of_unknown_root_is_fatal(go_tree) -> None:
    with pytest.raises(ResolutionError):
        PackageUniverseScanner(go_tree.locator()).scan(["acme/unknown"])
