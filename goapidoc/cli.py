"""CLI entrypoints for goapidoc commands."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from .config import ScanConfig, load_config, split_packages
from .context import ScanContext
from .errors import ApiDocError
from .handlers import controller_predicate
from .logging import configure_logging, get_logger
from .orchestrator import ApiDocuments, ApiParser
from .render.markdown import MarkdownRenderer


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _add_scan_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .goapidoc.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--packages",
        help="Comma separated root package identifiers to scan.",
    )
    parser.add_argument(
        "--main-file",
        help="Go file whose comments carry the general API directives (@APITitle, ...).",
    )
    parser.add_argument("--base-path", help="Base URL copied into every API declaration.")
    parser.add_argument(
        "--controller-class",
        help="Only document methods whose receiver type name contains this text.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goapidoc",
        description="Generate Swagger 1.2 documents from annotated Go source comments.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Scan packages and write the generated documents.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_scan_options(generate_parser)
    generate_parser.add_argument("--output", help="Directory the documents are written to.")
    generate_parser.add_argument(
        "--format",
        choices=["json", "markdown"],
        help="Output format (defaults to json).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Scan packages once and serve the documents over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_scan_options(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def _effective_config(args: argparse.Namespace) -> ScanConfig:
    config = load_config(Path(args.config))
    overrides: dict[str, object] = {}
    if args.packages:
        overrides["packages"] = split_packages(args.packages)
    if args.main_file:
        overrides["main_file"] = Path(args.main_file)
    if args.base_path is not None:
        overrides["base_path"] = args.base_path
    if args.controller_class is not None:
        overrides["controller_class"] = args.controller_class
    if getattr(args, "output", None):
        overrides["output_dir"] = Path(args.output)
    if getattr(args, "format", None):
        overrides["output_format"] = args.format
    return replace(config, **overrides)


def generate_documents(config: ScanConfig) -> ApiDocuments:
    """Run a full scan described by ``config``."""
    context = ScanContext(ignored_packages=config.ignored_packages)
    parser = ApiParser(
        context,
        is_handler=controller_predicate(config.controller_class),
        base_path=config.base_path,
        excluded_dirs=config.excluded_dirs,
    )
    if config.main_file is not None:
        parser.parse_general_api_info(config.main_file)
    parser.parse_api(config.packages)
    return parser.documents()


def _write_documents(config: ScanConfig, documents: ApiDocuments) -> list[Path]:
    output_dir = config.output_dir or Path.cwd()
    if config.output_format == "markdown":
        return [MarkdownRenderer().write(documents, output_dir)]
    return documents.write_json(output_dir)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for goapidoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)
    logger = get_logger("cli")

    try:
        config = _effective_config(args)
    except ApiDocError as exc:
        parser.exit(1, f"goapidoc {args.command} failed ({exc.kind}): {exc}\n")
    if not config.packages:
        parser.error("no packages to scan; pass --packages or set `packages` in .goapidoc.yml")

    if args.command == "generate":
        try:
            documents = generate_documents(config)
            written = _write_documents(config, documents)
        except ApiDocError as exc:
            parser.exit(1, f"goapidoc generate failed ({exc.kind}): {exc}\n")
        for path in written:
            logger.info("Wrote %s", path)
            print(f"Documentation written to {path}")
    elif args.command == "serve":
        from .service import run_service

        try:
            documents = generate_documents(config)
        except ApiDocError as exc:
            parser.exit(1, f"goapidoc serve failed ({exc.kind}): {exc}\n")
        run_service(lambda: documents, host=args.host, port=args.port)


if __name__ == "__main__":  # pragma: no cover
    main()
