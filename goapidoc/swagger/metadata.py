"""Document-level directives: general API info and sub-API descriptions."""

from __future__ import annotations

import re
from typing import Iterable

from ..logging import get_logger
from .listing import ResourceListing

SUB_API_MARKER = "@SubApi"

# directive -> attribute of ResourceListing.info ("api_version" lives on the listing)
_GENERAL_DIRECTIVES = {
    "@apiversion": "api_version",
    "@apititle": "title",
    "@apidescription": "description",
    "@termsofserviceurl": "terms_of_service_url",
    "@contact": "contact",
    "@licenseurl": "license_url",
    "@license": "license",
}

_SUB_API = re.compile(r"([^\[]+)\[([\w\-/]+)")

logger = get_logger("swagger.metadata")


def apply_general_directives(listing: ResourceListing, lines: Iterable[str]) -> None:
    """Copy ``@APITitle``-style directives into the listing; later lines win."""
    for line in lines:
        tokens = line.split(None, 1)
        if not tokens:
            continue
        attribute = _GENERAL_DIRECTIVES.get(tokens[0].lower())
        if attribute is None:
            continue
        value = tokens[1].strip() if len(tokens) > 1 else ""
        if attribute == "api_version":
            listing.api_version = value
        else:
            setattr(listing.info, attribute, value)


def apply_sub_api_directive(listing: ResourceListing, line: str) -> bool:
    """Handle ``@SubApi Fancy API [/fancy-api]``.

    Every listing reference with the bracketed path gets the description.
    Returns False when the line is not a well-formed sub-API directive.
    """
    if not line.startswith(SUB_API_MARKER):
        return False
    value = line[len(SUB_API_MARKER) :].strip()
    match = _SUB_API.search(value)
    if match is None:
        logger.warning("Can not parse sub api description %s, skipped", value)
        return False
    description = match.group(1).strip()
    for ref in listing.apis:
        if ref.path == match.group(2):
            ref.description = description
    return True


__all__ = ["SUB_API_MARKER", "apply_general_directives", "apply_sub_api_directive"]
