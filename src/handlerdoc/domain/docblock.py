"""Docblock parsing: pure string functions over structured comments.

A structured comment is a docstring (or a C-style ``/** ... */`` block coming
from a descriptor table) holding free text plus ``@tag`` lines::

    Create a new order for a customer.

    @param int $customer_id
    @return OrderId

None of these functions touch introspection; they take the comment text
and return plain strings.
"""

from __future__ import annotations

import re

PARAM_TAG = "@param"
RETURN_TAG = "@return"
DEFAULT_BINDING_MARKER = "$"

_DELIMITERS = re.compile(r"/\*\*+|\*+/")
_CONTINUATION = re.compile(r"^[\s*]+", re.MULTILINE)
_TAG_LINE = re.compile(r"^@\w+\b.*$", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")


def parse_description(doc_comment: str | None) -> str:
    """Reduce a structured comment to a single line of free text.

    Strips comment delimiters, leading ``*`` continuation markers, and
    ``@tag`` lines, then collapses whitespace. Returns ``""`` when there is
    no comment.

    Examples:
        >>> parse_description("/**\\n * Adds an order.\\n *\\n * @param int $id\\n */")
        'Adds an order.'
        >>> parse_description(None)
        ''
    """
    if not doc_comment:
        return ""
    text = _DELIMITERS.sub("", doc_comment)
    text = _CONTINUATION.sub("", text)
    text = _TAG_LINE.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def parse_param_type(
    doc_comment: str | None,
    param_name: str,
    *,
    tag: str = PARAM_TAG,
    binding_marker: str = DEFAULT_BINDING_MARKER,
) -> str | None:
    """Find the documented type of *param_name* in an ``@param`` tag.

    Matches ``@param <type> $<name>`` and returns ``<type>``, or None when
    the comment has no such tag.
    """
    if not doc_comment:
        return None
    pattern = re.compile(
        rf"{re.escape(tag)}\s+(\S+)\s+{re.escape(binding_marker + param_name)}(?=\s|$)"
    )
    match = pattern.search(doc_comment)
    if match is None:
        return None
    return match.group(1)


def parse_return_tag(doc_comment: str | None, *, tag: str = RETURN_TAG) -> str | None:
    """Return the text after the first ``@return`` tag, up to end of line.

    The text is taken verbatim so unions and generics that annotations
    cannot express survive (``@return array<int, OrderId>|null``).
    Returns None when the tag is missing or carries no text.
    """
    if not doc_comment:
        return None
    match = re.search(rf"{re.escape(tag)}(?![\w-])(.*)", doc_comment)
    if match is None:
        return None
    return _DELIMITERS.sub("", match.group(1)).strip() or None
