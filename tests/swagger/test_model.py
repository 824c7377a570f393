"""Tests for goapidoc.swagger.model."""

from __future__ import annotations

import pytest

from goapidoc.errors import ResolutionError
from goapidoc.swagger.model import ModelBuilder, ModelProperty, model_id, tag_lookup


def test_model_id_joins_package_segments() -> None:
    assert model_id("acme/models", "Order") == "acme.models.Order"
    assert model_id("models", "Order") == "models.Order"


def test_tag_lookup_reads_struct_tag_values() -> None:
    tag = 'json:"id,omitempty" description:"the \\"primary\\" key"'

    assert tag_lookup(tag, "json") == "id,omitempty"
    assert tag_lookup(tag, "description") == 'the \\"primary\\" key'
    assert tag_lookup(tag, "xml") is None
    assert tag_lookup("", "json") is None


@pytest.mark.parametrize(
    ("expr", "expected"),
    [
        ("int", {"type": "integer", "format": "int64"}),
        ("*float32", {"type": "number", "format": "float"}),
        ("bool", {"type": "boolean"}),
        ("time.Time", {"type": "string", "format": "date-time"}),
        ("map[string]int", {"type": "object"}),
        ("interface{}", {"type": "object"}),
        ("[]string", {"type": "array", "items": {"type": "string"}}),
        ("[4]int32", {"type": "array", "items": {"type": "integer", "format": "int32"}}),
    ],
)
def test_builtin_types_need_no_models(model_builder: ModelBuilder, expr, expected) -> None:
    described, models = model_builder.register(expr, "acme/api")

    assert described.to_dict() == expected
    assert models == []


def test_struct_reference_collects_nested_models(model_builder: ModelBuilder) -> None:
    described, models = model_builder.register("models.Order", "acme/api")

    assert described == ModelProperty(ref="acme.models.Order")
    assert [model.id for model in models] == ["acme.models.Order", "acme.models.Item"]

    order = models[0].to_dict()
    assert order["description"] == "Order is a customer purchase."
    assert order["properties"] == {
        "id": {"type": "integer", "format": "int64"},
        "items": {
            "type": "array",
            "items": {"$ref": "acme.models.Item"},
            "description": "ordered items",
        },
        "created": {"type": "string", "format": "date-time"},
        "status": {"type": "string"},
        "total": {"type": "string"},
        "next": {"$ref": "acme.models.Order"},
        "Meta": {"type": "object"},
    }


def test_embedded_struct_fields_are_inlined(model_builder: ModelBuilder) -> None:
    _, models = model_builder.register("[]models.Item", "acme/api")

    item = models[0]
    assert item.id == "acme.models.Item"
    assert list(item.properties) == ["created_by", "SKU", "quantity"]
    assert item.properties["quantity"].to_dict() == {"type": "integer", "format": "int32"}


def test_interfaces_and_json_marshalers_are_not_models(model_builder: ModelBuilder) -> None:
    payload, payload_models = model_builder.register("models.Payload", "acme/api")
    money, money_models = model_builder.register("models.Money", "acme/api")

    assert payload.to_dict() == {"type": "object"}
    assert money.to_dict() == {"type": "string"}
    assert payload_models == money_models == []


def test_unknown_type_is_fatal(model_builder: ModelBuilder) -> None:
    with pytest.raises(ResolutionError):
        model_builder.register("models.Invoice", "acme/api")
