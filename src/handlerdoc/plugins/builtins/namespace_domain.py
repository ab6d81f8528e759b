"""Built-in domain classifier based on namespace conventions.

Two rules, tried in order:

1. The segment right after an anchor segment (``Domain``)::

       App\\Core\\Domain\\Product\\Command\\AddProductCommand  ->  Product
       shop.domain.order.command.AddOrderCommand              ->  order

2. The segment right before the command/query segment::

       billing.invoice.commands.IssueInvoice                  ->  invoice

Registered ``trylast`` so project plugins always get the first word.
"""

from __future__ import annotations

from collections.abc import Iterable

from handlerdoc.config.models import DomainConfig
from handlerdoc.domain.types import DEFAULT_COMMAND_SEGMENTS, split_type_name
from handlerdoc.plugins.hookspecs import hookimpl


class NamespaceDomainPlugin:
    """Derive the domain from the message type's namespace."""

    def __init__(
        self,
        config: DomainConfig | None = None,
        command_segments: Iterable[str] = DEFAULT_COMMAND_SEGMENTS,
    ) -> None:
        self._config = config or DomainConfig()
        self._anchors = frozenset(self._config.anchor_segments)
        self._markers = frozenset((*command_segments, *self._config.query_segments))

    @hookimpl(trylast=True)
    def parse_domain(self, command_class: str) -> str | None:
        namespace, _ = split_type_name(command_class)

        for index, segment in enumerate(namespace[:-1]):
            following = namespace[index + 1]
            if segment in self._anchors and following not in self._markers:
                return following

        for index, segment in enumerate(namespace):
            if segment in self._markers and index > 0:
                return namespace[index - 1]
        return None
