from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from shop.crm.models import Customer, Segment


class RegisterCustomerCommand:
    """Registers a customer imported from the CRM."""

    def __init__(
        self,
        customer: Customer,
        name: str | None = None,
        segment: Optional[Segment] = None,  # noqa: UP045
    ) -> None:
        self.customer = customer
        self.name = name
        self.segment = segment
