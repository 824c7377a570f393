"""Core data models shared across goapidoc components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class ResolvedPackage:
    """A package identifier paired with its canonical directory."""

    identifier: str
    real_path: Path

    @property
    def key(self) -> str:
        return str(self.real_path)


@dataclass
class FieldDefinition:
    """One field declaration inside a struct type."""

    names: List[str]
    type_expr: str
    tag: str = ""
    embedded: bool = False


@dataclass
class TypeDefinition:
    """Top-level type declaration, keyed by its local name in a symbol table."""

    name: str
    kind: str
    type_expr: str
    file: str
    line: int
    fields: List[FieldDefinition] = field(default_factory=list)
    doc: str = ""
    marshals_json: bool = False


@dataclass(frozen=True)
class ImportSpec:
    """Import statement of a compilation unit."""

    path: str
    name: Optional[str] = None
    line: int = 0


@dataclass
class FunctionDeclaration:
    """Top-level function or method declaration with its doc comments."""

    name: str
    receiver: Optional[str]
    doc_comments: List[str]
    file: str
    line: int
