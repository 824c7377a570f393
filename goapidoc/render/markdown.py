"""Markdown rendering of API documents through Jinja templates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..orchestrator import ApiDocuments

_TEMPLATES_DIR = Path(__file__).parent / "templates"
_TEMPLATE_NAME = "api.md.j2"


def _type_label(described: dict) -> str:
    if "$ref" in described:
        return described["$ref"]
    label = described.get("type", "")
    items = described.get("items")
    if label == "array" and items:
        return f"array of {_type_label(items)}"
    if described.get("format"):
        return f"{label} ({described['format']})"
    return label


class MarkdownRenderer:
    """Renders the resource listing and declarations into one Markdown page."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["type_label"] = _type_label

    def render(self, documents: ApiDocuments) -> str:
        template = self._env.get_template(_TEMPLATE_NAME)
        text = template.render(
            listing=documents.resource_listing,
            declarations=documents.api_declarations,
        )
        return text.strip() + "\n"

    def write(self, documents: ApiDocuments, output_dir: Path) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        target = output_dir / "API.md"
        target.write_text(self.render(documents), encoding="utf-8")
        return target


__all__ = ["MarkdownRenderer"]
