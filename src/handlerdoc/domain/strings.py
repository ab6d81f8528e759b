"""Identifier case conversion."""

from __future__ import annotations

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s_\-]+")


def convert_camel_case_to_kebab_case(identifier: str) -> str:
    """Convert a mixed-case identifier into a hyphenated lowercase slug.

    Acronyms stay together, underscores and spaces become hyphens.

    Examples:
        >>> convert_camel_case_to_kebab_case("AddOrderCommand")
        'add-order-command'
        >>> convert_camel_case_to_kebab_case("GetHTTPResponse")
        'get-http-response'
        >>> convert_camel_case_to_kebab_case("bulk_delete_items")
        'bulk-delete-items'
    """
    text = _ACRONYM_BOUNDARY.sub(r"\1-\2", identifier)
    text = _WORD_BOUNDARY.sub(r"\1-\2", text)
    return _SEPARATORS.sub("-", text).strip("-").lower()
