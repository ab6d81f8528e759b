from __future__ import annotations

from dataclasses import dataclass, field

from shop.domain.order.value_objects import Channel


class AddOrderCommand:
    """
    Adds a new order for an existing customer.

    Orders start   in the pending state.

    @see CancelOrderCommand
    """

    def __init__(
        self,
        customer_id: int,
        cart_id,
        note: str | None = None,
        channel: Channel = Channel.WEB,
        priority: int = 0,
    ) -> None:
        """
        @param int $cart_id
        @param string|null $note
        """
        self.customer_id = customer_id
        self.cart_id = cart_id
        self.note = note
        self.channel = channel
        self.priority = priority


@dataclass(frozen=True)
class CancelOrderCommand:
    """Cancels an order that has not shipped yet."""

    order_id: int
    reasons: list[str] = field(default_factory=list)


class BulkDeleteOrdersCommand:
    pass


class TagOrderCommand:
    """Attaches free-form tags to an order."""

    def __init__(self, order_id: int, *tags: str) -> None:
        self.order_id = order_id
        self.tags = tags


class RenameOrderCommand:
    """Renames an order."""

    def __init__(self, order_id: int, name: str = None, label="draft") -> None:
        self.order_id = order_id
        self.name = name
        self.label = label


def make_order() -> AddOrderCommand:
    return AddOrderCommand(1, 2)
