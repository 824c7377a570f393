from __future__ import annotations

import pytest

from goapidoc.packages.symbols import SymbolTableBuilder
from goapidoc.resolver import ModelResolver
from goapidoc.swagger.model import ModelBuilder
from tests._fixtures.go_tree import GoTreeBuilder

MODELS_SOURCE = """
package models

import "time"

// Order is a customer purchase.
type Order struct {
\tID      int64     `json:"id"`
\tItems   []Item    `json:"items" description:"ordered items"`
\tCreated time.Time `json:"created"`
\tStatus  Status    `json:"status"`
\tTotal   Money     `json:"total"`
\tNext    *Order    `json:"next,omitempty"`
\tMeta    map[string]string
\tSkipped string `json:"-"`
\tsecret  string
}

type Item struct {
\tBase
\tSKU      string
\tQuantity uint8 `json:"quantity"`
}

type Base struct {
\tCreatedBy string `json:"created_by"`
}

type Status string

type Money struct {
\tCents int64
}

func (m Money) MarshalJSON() ([]byte, error) {
\treturn nil, nil
}

type Payload interface {
\tKind() string
}
"""

API_SOURCE = """
package api

import "acme/models"

type OrderController struct{}
"""


@pytest.fixture
def shop_tree(go_tree: GoTreeBuilder) -> GoTreeBuilder:
    go_tree.write("time", {"time.go": "package time\n\ntype Time struct{}\n"}, toolchain=True)
    go_tree.write("acme/models", {"models.go": MODELS_SOURCE})
    go_tree.write("acme/api", {"api.go": API_SOURCE})
    return go_tree


@pytest.fixture
def model_builder(shop_tree: GoTreeBuilder) -> ModelBuilder:
    context = shop_tree.context()
    SymbolTableBuilder(context).build("acme/api")
    return ModelBuilder(ModelResolver(context))
