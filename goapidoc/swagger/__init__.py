"""Swagger 1.2 document model: operations, models, declarations and listing."""

from .listing import (
    Api,
    ApiDeclaration,
    ApiInfo,
    ApiRef,
    OperationAggregator,
    ResourceListing,
    SWAGGER_VERSION,
)
from .metadata import apply_general_directives, apply_sub_api_directive
from .model import Model, ModelBuilder, ModelProperty
from .operation import Operation, Parameter, ResponseMessage

__all__ = [
    "Api",
    "ApiDeclaration",
    "ApiInfo",
    "ApiRef",
    "Model",
    "ModelBuilder",
    "ModelProperty",
    "Operation",
    "OperationAggregator",
    "Parameter",
    "ResourceListing",
    "ResponseMessage",
    "SWAGGER_VERSION",
    "apply_general_directives",
    "apply_sub_api_directive",
]
