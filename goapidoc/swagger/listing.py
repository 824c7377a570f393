"""Resource listing, API declarations and the operation aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..logging import get_logger
from .model import Model
from .operation import Operation

SWAGGER_VERSION = "1.2"


@dataclass
class ApiInfo:
    title: str = ""
    description: str = ""
    terms_of_service_url: str = ""
    contact: str = ""
    license: str = ""
    license_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "description": self.description,
            "termsOfServiceUrl": self.terms_of_service_url,
            "contact": self.contact,
            "license": self.license,
            "licenseUrl": self.license_url,
        }
        return {key: value for key, value in data.items() if value}


@dataclass
class ApiRef:
    """Entry of the resource listing pointing at one API declaration."""

    path: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "description": self.description}


@dataclass
class ResourceListing:
    api_version: str = ""
    swagger_version: str = SWAGGER_VERSION
    apis: List[ApiRef] = field(default_factory=list)
    info: ApiInfo = field(default_factory=ApiInfo)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "swaggerVersion": self.swagger_version,
            "apis": [ref.to_dict() for ref in self.apis],
            "info": self.info.to_dict(),
        }


@dataclass
class Api:
    """All operations sharing one path."""

    path: str
    description: str = ""
    operations: List[Operation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path}
        if self.description:
            data["description"] = self.description
        data["operations"] = [operation.to_dict() for operation in self.operations]
        return data


@dataclass
class ApiDeclaration:
    """Operations and models of one resource."""

    resource_path: str
    api_version: str = ""
    swagger_version: str = SWAGGER_VERSION
    base_path: str = ""
    produces: List[str] = field(default_factory=list)
    consumes: List[str] = field(default_factory=list)
    apis: List[Api] = field(default_factory=list)
    models: Dict[str, Model] = field(default_factory=dict)

    def add_operation(self, operation: Operation) -> None:
        for content_type in operation.consumes:
            if content_type not in self.consumes:
                self.consumes.append(content_type)
        for content_type in operation.produces:
            if content_type not in self.produces:
                self.produces.append(content_type)

        for api in self.apis:
            if api.path == operation.path:
                api.operations.append(operation)
                break
        else:
            self.apis.append(Api(path=operation.path, operations=[operation]))

        for model in operation.models:
            self.models[model.id] = model

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "apiVersion": self.api_version,
            "swaggerVersion": self.swagger_version,
            "basePath": self.base_path,
            "resourcePath": self.resource_path,
        }
        if self.produces:
            data["produces"] = list(self.produces)
        if self.consumes:
            data["consumes"] = list(self.consumes)
        data["apis"] = [api.to_dict() for api in self.apis]
        data["models"] = {
            model_id: self.models[model_id].to_dict() for model_id in sorted(self.models)
        }
        return data


class OperationAggregator:
    """Groups operations by resource and keeps the resource listing in first-seen order."""

    def __init__(self, listing: ResourceListing | None = None, base_path: str = "") -> None:
        self.listing = listing or ResourceListing()
        self.base_path = base_path
        self.apis: Dict[str, ApiDeclaration] = {}
        self.logger = get_logger("swagger.listing")

    def add(self, operation: Operation) -> None:
        segments = [part.strip() for part in operation.path.split("/") if part.strip()]
        resource = operation.force_resource or (segments[0] if segments else "")
        if not resource:
            self.logger.warning(
                "Operation %s %s has no resource segment, skipped",
                operation.http_method,
                operation.path,
            )
            return

        declaration = self.apis.get(resource)
        if declaration is None:
            # Version and base path are copied now; later listing changes do not propagate.
            declaration = ApiDeclaration(
                resource_path="/" + resource,
                api_version=self.listing.api_version,
                base_path=self.base_path,
            )
            self.apis[resource] = declaration
            self.listing.apis.append(
                ApiRef(path=declaration.resource_path, description=operation.summary)
            )

        declaration.add_operation(operation)

    def declarations_dict(self) -> Dict[str, Any]:
        return {resource: self.apis[resource].to_dict() for resource in sorted(self.apis)}


__all__ = [
    "Api",
    "ApiDeclaration",
    "ApiInfo",
    "ApiRef",
    "OperationAggregator",
    "ResourceListing",
    "SWAGGER_VERSION",
]
