"""Swagger models built from resolved Go struct definitions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from ..models import TypeDefinition
from ..resolver import ModelResolver

SWAGGER_PRIMITIVES: Dict[str, Tuple[str, Optional[str]]] = {
    "bool": ("boolean", None),
    "byte": ("string", "byte"),
    "rune": ("integer", "int32"),
    "int": ("integer", "int64"),
    "int8": ("integer", "int32"),
    "int16": ("integer", "int32"),
    "int32": ("integer", "int32"),
    "int64": ("integer", "int64"),
    "uint": ("integer", "int64"),
    "uint8": ("integer", "int32"),
    "uint16": ("integer", "int32"),
    "uint32": ("integer", "int64"),
    "uint64": ("integer", "int64"),
    "uintptr": ("integer", "int64"),
    "float32": ("number", "float"),
    "float64": ("number", "double"),
    "complex64": ("number", None),
    "complex128": ("number", None),
    "string": ("string", None),
    "time.Time": ("string", "date-time"),
    "error": ("string", None),
    # Swagger names accepted verbatim in comment directives.
    "integer": ("integer", None),
    "number": ("number", None),
    "boolean": ("boolean", None),
    "object": ("object", None),
    "file": ("File", None),
}

_OPAQUE_TYPE = re.compile(r"^(map\[|interface\s*\{|struct\s*\{|func\s*\(|(<-\s*)?chan\b)")
_TAG_PAIR = re.compile(r'([A-Za-z0-9_]+):"((?:[^"\\]|\\.)*)"')
_FIXED_ARRAY = re.compile(r"^\[[^\]]*\]")


def is_basic_type(type_name: str) -> bool:
    return type_name in SWAGGER_PRIMITIVES


def tag_lookup(tag: str, key: str) -> Optional[str]:
    """Return the value for ``key`` in a Go struct tag, like reflect.StructTag.Lookup."""
    for name, value in _TAG_PAIR.findall(tag):
        if name == key:
            return value
    return None


def model_id(package: str, name: str) -> str:
    return ".".join(package.split("/") + [name])


@dataclass
class ModelProperty:
    """Property of a model, or the description of any documented type."""

    type: Optional[str] = None
    format: Optional[str] = None
    ref: Optional[str] = None
    items: Optional["ModelProperty"] = None
    description: Optional[str] = None

    @property
    def type_name(self) -> str:
        """Name used where a single type string is expected (model id for refs)."""
        return self.ref or self.type or ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.ref:
            data["$ref"] = self.ref
        if self.type:
            data["type"] = self.type
        if self.format:
            data["format"] = self.format
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class Model:
    id: str
    description: str = ""
    properties: Dict[str, ModelProperty] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        if self.description:
            data["description"] = self.description
        data["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        return data


class ModelBuilder:
    """Turns type expressions into Swagger types, collecting the models they need."""

    def __init__(self, resolver: ModelResolver) -> None:
        self._resolver = resolver

    def register(self, type_expr: str, package: str) -> Tuple[ModelProperty, List[Model]]:
        """Describe ``type_expr`` as seen from ``package``.

        Returns the Swagger description and every model reached from it, the
        outermost model first.
        """
        known: Dict[str, Model] = {}
        collected: List[Model] = []
        described = self._describe(type_expr, package, known, collected)
        return described, collected

    def _describe(
        self,
        type_expr: str,
        package: str,
        known: Dict[str, Model],
        collected: List[Model],
    ) -> ModelProperty:
        expr = type_expr.strip().lstrip("*").strip()
        if _FIXED_ARRAY.match(expr):
            element = _FIXED_ARRAY.sub("", expr, count=1)
            items = self._describe(element, package, known, collected)
            return ModelProperty(
                type="array",
                items=ModelProperty(type=items.type, format=items.format, ref=items.ref),
            )
        if not expr or expr == "any" or _OPAQUE_TYPE.match(expr):
            return ModelProperty(type="object")
        if expr in SWAGGER_PRIMITIVES:
            swagger_type, swagger_format = SWAGGER_PRIMITIVES[expr]
            return ModelProperty(type=swagger_type, format=swagger_format)

        # Type parameters are not instantiated, the generic type is documented as is.
        expr = expr.split("[", 1)[0]
        definition, owner = self._resolver.resolve(expr, package)
        return self._describe_definition(definition, owner, known, collected)

    def _describe_definition(
        self,
        definition: TypeDefinition,
        owner: str,
        known: Dict[str, Model],
        collected: List[Model],
    ) -> ModelProperty:
        if definition.marshals_json:
            return ModelProperty(type="string")
        if definition.kind == "interface":
            return ModelProperty(type="object")
        if definition.kind != "struct":
            return self._describe(definition.type_expr, owner, known, collected)

        identifier = model_id(owner, definition.name)
        if identifier not in known:
            model = Model(id=identifier, description=definition.doc)
            # Registered before walking fields so self-referencing types terminate.
            known[identifier] = model
            collected.append(model)
            self._fill(model, definition, owner, known, collected, {identifier})
        return ModelProperty(ref=identifier)

    def _fill(
        self,
        model: Model,
        definition: TypeDefinition,
        owner: str,
        known: Dict[str, Model],
        collected: List[Model],
        inlined: Set[str],
    ) -> None:
        for struct_field in definition.fields:
            if struct_field.embedded:
                self._inline(model, struct_field.type_expr, owner, known, collected, inlined)
                continue

            tag = tag_lookup(struct_field.tag, "json")
            json_name = tag.split(",", 1)[0] if tag else ""
            if json_name == "-":
                continue
            for name in struct_field.names:
                if not name[:1].isupper():
                    continue
                prop = self._describe(struct_field.type_expr, owner, known, collected)
                prop.description = tag_lookup(struct_field.tag, "description")
                model.properties[json_name or name] = prop

    def _inline(
        self,
        model: Model,
        type_expr: str,
        owner: str,
        known: Dict[str, Model],
        collected: List[Model],
        inlined: Set[str],
    ) -> None:
        expr = type_expr.lstrip("*").split("[", 1)[0]
        if expr in SWAGGER_PRIMITIVES:
            return
        definition, embedded_owner = self._resolver.resolve(expr, owner)
        identifier = model_id(embedded_owner, definition.name)
        if definition.kind != "struct" or identifier in inlined:
            return
        self._fill(
            model, definition, embedded_owner, known, collected, inlined | {identifier}
        )


__all__ = [
    "Model",
    "ModelBuilder",
    "ModelProperty",
    "SWAGGER_PRIMITIVES",
    "is_basic_type",
    "model_id",
    "tag_lookup",
]
