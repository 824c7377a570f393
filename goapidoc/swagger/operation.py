"""Operations built from handler doc comments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..errors import OperationCommentError
from .model import Model, ModelBuilder, ModelProperty

CONTENT_TYPES: Dict[str, str] = {
    "json": "application/json",
    "xml": "text/xml",
    "plain": "text/plain",
    "html": "text/html",
    "mpfd": "multipart/form-data",
}

_ROUTER = re.compile(r"([\w./\-{}]+)[^\[]+\[([^\]]+)")
_PARAM = re.compile(r'([-\w]+)\s+(\w+)\s+([\w./]+)\s+(\w+)\s+"([^"]+)"')
_RESPONSE = re.compile(r"(\d+)\s+([\w{}]+)\s+([\w\-./]+)[^\"]*(.*)?")


@dataclass
class Parameter:
    param_type: str
    name: str
    description: str
    data_type: str
    format: Optional[str] = None
    required: bool = False
    allow_multiple: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "paramType": self.param_type,
            "name": self.name,
            "description": self.description,
            "dataType": self.data_type,
            "type": self.data_type,
        }
        if self.format:
            data["format"] = self.format
        data["allowMultiple"] = self.allow_multiple
        data["required"] = self.required
        return data


@dataclass
class ResponseMessage:
    code: int
    message: str
    response_model: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.response_model:
            data["responseModel"] = self.response_model
        return data


def strip_comment_markers(comment: str) -> str:
    text = comment.strip()
    if text.startswith("//"):
        return text.lstrip("/").strip()
    if text.startswith("/*"):
        text = text[2:]
        if text.endswith("*/"):
            text = text[:-2]
    return text.strip()


class Operation:
    """One documented endpoint; populated line by line from its doc comments."""

    def __init__(self, models: ModelBuilder, package: str) -> None:
        self._models = models
        self.package = package
        self.http_method = ""
        self.nickname = ""
        self.type = ""
        self.items: Optional[ModelProperty] = None
        self.summary = ""
        self.notes = ""
        self.parameters: List[Parameter] = []
        self.response_messages: List[ResponseMessage] = []
        self.consumes: List[str] = []
        self.produces: List[str] = []
        self.path = ""
        self.force_resource = ""
        self.models: List[Model] = []
        self._directives: Dict[str, Callable[[str], None]] = {
            "@router": self._parse_router,
            "@resource": self._parse_resource,
            "@title": self._parse_title,
            "@description": self._parse_description,
            "@notes": self._parse_notes,
            "@success": self._parse_response,
            "@failure": self._parse_response,
            "@param": self._parse_param,
            "@accept": self._parse_accept,
            "@consume": self._parse_accept,
        }

    def parse_comment(self, comment: str) -> None:
        """Apply one comment line; raises OperationCommentError when a directive is malformed."""
        line = strip_comment_markers(comment)
        if not line:
            return
        attribute = line.split()[0]
        handler = self._directives.get(attribute.lower())
        if handler is not None:
            handler(line[len(attribute) :].strip())

    # ------------------------------------------------------------------
    # Directives

    # @Router /customer/get-wishlist/{wishlist_id} [get]
    def _parse_router(self, value: str) -> None:
        match = _ROUTER.search(value)
        if match is None:
            raise OperationCommentError(f'Can not parse router comment "@Router {value}", skipped.')
        self.path = match.group(1)
        self.http_method = match.group(2).strip().upper()

    def _parse_resource(self, value: str) -> None:
        self.force_resource = value[1:] if value.startswith("/") else value

    def _parse_title(self, value: str) -> None:
        self.nickname = value

    def _parse_description(self, value: str) -> None:
        self.summary = value

    def _parse_notes(self, value: str) -> None:
        self.notes = value

    # @Param   order_id   path   int   true   "Order ID"
    def _parse_param(self, value: str) -> None:
        match = _PARAM.search(value)
        if match is None:
            raise OperationCommentError(f'Can not parse param comment "{value}", skipped.')
        described = self._register_type(match.group(3))
        self.parameters.append(
            Parameter(
                param_type=match.group(2),
                name=match.group(1),
                description=match.group(5),
                data_type=described.type_name,
                format=described.format,
                required=match.group(4).lower() in {"true", "required"},
            )
        )

    # @Success 200 {object} models.Order "Order payload"
    def _parse_response(self, value: str) -> None:
        match = _RESPONSE.search(value)
        if match is None:
            raise OperationCommentError(f'Can not parse response comment "{value}", skipped.')
        code = int(match.group(1))
        described = self._register_type(match.group(3))
        self.response_messages.append(
            ResponseMessage(
                code=code,
                message=(match.group(4) or "").strip().strip('"'),
                response_model=described.type_name,
            )
        )
        if code == 200:
            if match.group(2) == "{array}":
                self.type = "array"
                self.items = ModelProperty(type=described.type, ref=described.ref)
            else:
                self.type = described.type_name

    def _parse_accept(self, value: str) -> None:
        for accept in value.split(","):
            accept = accept.strip()
            content_type = CONTENT_TYPES.get(accept.lower())
            if content_type is None and "/" in accept:
                content_type = accept
            if content_type is None:
                raise OperationCommentError(f'Unknown content type "{accept}" in accept comment')
            _append_unique(self.consumes, content_type)
            _append_unique(self.produces, content_type)

    def _register_type(self, type_name: str) -> ModelProperty:
        described, models = self._models.register(type_name, self.package)
        known = {model.id for model in self.models}
        self.models.extend(model for model in models if model.id not in known)
        return described

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "httpMethod": self.http_method,
            "nickname": self.nickname,
            "type": self.type,
        }
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.summary:
            data["summary"] = self.summary
        if self.notes:
            data["notes"] = self.notes
        if self.parameters:
            data["parameters"] = [parameter.to_dict() for parameter in self.parameters]
        if self.response_messages:
            data["responseMessages"] = [message.to_dict() for message in self.response_messages]
        if self.produces:
            data["produces"] = list(self.produces)
        return data


def _append_unique(values: List[str], value: str) -> None:
    if value not in values:
        values.append(value)


__all__ = [
    "CONTENT_TYPES",
    "Operation",
    "Parameter",
    "ResponseMessage",
    "strip_comment_markers",
]
