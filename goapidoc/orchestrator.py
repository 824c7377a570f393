"""Pipeline orchestration: scan packages, build symbols, aggregate operations."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .config import split_packages
from .context import ScanContext
from .errors import OperationCommentError
from .handlers import HandlerPredicate, every_function
from .logging import get_logger
from .models import FunctionDeclaration
from .packages.scanner import PackageUniverseScanner
from .packages.sources import CompilationUnit, comment_lines, iter_functions
from .packages.symbols import SymbolTableBuilder
from .resolver import ModelResolver
from .swagger.listing import OperationAggregator, ResourceListing, SWAGGER_VERSION
from .swagger.metadata import apply_general_directives, apply_sub_api_directive
from .swagger.model import ModelBuilder
from .swagger.operation import Operation

_JSON_INDENT = 4


@dataclass
class ApiDocuments:
    """The two generated documents, as JSON-ready mappings."""

    resource_listing: Dict[str, Any]
    api_declarations: Dict[str, Dict[str, Any]]

    def resource_listing_json(self) -> str:
        return json.dumps(self.resource_listing, indent=_JSON_INDENT)

    def api_declarations_json(self) -> str:
        return json.dumps(self.api_declarations, indent=_JSON_INDENT)

    def write_json(self, output_dir: Path) -> List[Path]:
        """Write both documents into ``output_dir`` and return their paths."""
        output_dir.mkdir(parents=True, exist_ok=True)
        listing_path = output_dir / "resource_listing.json"
        declarations_path = output_dir / "api_declarations.json"
        listing_path.write_text(self.resource_listing_json() + "\n", encoding="utf-8")
        declarations_path.write_text(self.api_declarations_json() + "\n", encoding="utf-8")
        return [listing_path, declarations_path]


class ApiParser:
    """Extracts API documentation from the comments of a Go package universe."""

    def __init__(
        self,
        context: ScanContext | None = None,
        *,
        is_handler: HandlerPredicate = every_function,
        base_path: str = "",
        excluded_dirs: Sequence[str] | None = None,
    ) -> None:
        self.context = context or ScanContext()
        self.is_handler = is_handler
        if excluded_dirs is None:
            self.scanner = PackageUniverseScanner(self.context.locator)
        else:
            self.scanner = PackageUniverseScanner(self.context.locator, excluded_dirs)
        self.symbols = SymbolTableBuilder(self.context)
        self.resolver = ModelResolver(self.context)
        self.models = ModelBuilder(self.resolver)
        self.aggregator = OperationAggregator(ResourceListing(), base_path=base_path)
        self.logger = get_logger("orchestrator")

    @property
    def listing(self) -> ResourceListing:
        return self.aggregator.listing

    def parse_general_api_info(self, main_api_file: Path) -> None:
        """Read document-level directives from the comments of one file."""
        unit = self.context.sources.parse_file(Path(main_api_file))
        self.listing.swagger_version = SWAGGER_VERSION
        apply_general_directives(self.listing, comment_lines(unit))

    def parse_api(self, package_names: str | Sequence[str]) -> List[str]:
        """Scan the packages below the given roots and aggregate their operations."""
        roots = split_packages(package_names)
        packages = self.scanner.scan(roots)
        self.logger.info("Scanning %d packages", len(packages))
        for package in packages:
            self.parse_type_definitions(package)
        for package in packages:
            self.parse_api_description(package)
        return packages

    def parse_type_definitions(self, package: str) -> None:
        self.symbols.build(package)

    def parse_api_description(self, package: str) -> None:
        resolved = self.context.package(package)
        for unit in self.context.sources.units_of(resolved.real_path):
            for function in iter_functions(unit):
                if self.is_handler(function):
                    self._parse_handler(function, package)
            self._parse_sub_apis(unit)

    def _parse_handler(self, function: FunctionDeclaration, package: str) -> None:
        operation = Operation(self.models, package)
        for comment in function.doc_comments:
            try:
                operation.parse_comment(comment)
            except OperationCommentError as exc:
                self.logger.warning(
                    "Can not parse comment for function: %s, package: %s, got error: %s",
                    function.name,
                    package,
                    exc,
                )
        if operation.path:
            self.aggregator.add(operation)

    def _parse_sub_apis(self, unit: CompilationUnit) -> None:
        for line in comment_lines(unit):
            apply_sub_api_directive(self.listing, line)

    def documents(self) -> ApiDocuments:
        return ApiDocuments(
            resource_listing=self.listing.to_dict(),
            api_declarations=self.aggregator.declarations_dict(),
        )


__all__ = ["ApiDocuments", "ApiParser"]
