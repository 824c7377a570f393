"""Human-readable renderings of generated API documents."""

from .markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
