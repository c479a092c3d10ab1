"""Transaction protocol - submission and result shapes exchanged with callers."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation


def _to_int(value):
    """Integral numbers and numeric strings become int, anything else is returned as is."""
    if isinstance(value, bool):
        return value
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return value
    if not number.is_finite() or number != number.to_integral_value():
        return value
    return int(number)


def _to_minor_units(price):
    """Major-unit price (2, "2.50") to minor units (200, 250). None = catalog price."""
    if price is None or isinstance(price, bool):
        return price
    try:
        amount = Decimal(str(price).strip())
    except InvalidOperation:
        return price
    if not amount.is_finite():
        return price
    return _to_int(amount * 100)


@dataclass(frozen=True)
class ItemRequest:
    """One requested line. unit_price_q None = catalog price."""

    product_id: int
    quantity: int
    unit_price_q: int | None = None


@dataclass(frozen=True)
class TransactionRequest:
    """Purchase submitted at the counter."""

    customer_mobile: str
    items: list[ItemRequest]
    apply_offer: bool | None = None  # None = COPYMAN["DEFAULT_APPLY_OFFER"]

    @classmethod
    def from_payload(cls, payload: dict) -> "TransactionRequest":
        """
        Build from the POS JSON body.

        Shape:
            {
                "customerMobile": "9876543210",
                "applyOffer": true,
                "items": [{"id": 1, "quantity": 150, "price": 2.5}]
            }

        ``id`` and ``quantity`` may be numbers or numeric strings. ``price``
        is in major units (rupees) and is converted to minor units; a price
        finer than one minor unit is left as is. Values that are not whole
        numbers pass through unchanged and Gates reject them.

        Only an explicit ``false`` disables redemption.
        """
        raw_items = payload.get("items")
        items = raw_items
        if isinstance(raw_items, list):
            items = [
                ItemRequest(
                    product_id=_to_int(item.get("id")),
                    quantity=_to_int(item.get("quantity")),
                    unit_price_q=_to_minor_units(item.get("price")),
                )
                if isinstance(item, dict)
                else item
                for item in raw_items
            ]
        return cls(
            customer_mobile=str(payload.get("customerMobile") or ""),
            items=items,
            apply_offer=payload.get("applyOffer") is not False,
        )


@dataclass(frozen=True)
class LineResult:
    """Paid/free split of one line item."""

    product_id: int
    quantity: int
    paid_quantity: int
    free_quantity: int
    unit_price_q: int
    earned: int = 0

    @property
    def line_total_q(self) -> int:
        return self.paid_quantity * self.unit_price_q


@dataclass(frozen=True)
class RewardStatus:
    """Customer-facing view of the loyalty ledger."""

    total_printed: int
    paid_total: int
    free_remaining: int
    cycle_progress: int
    cycles_completed: int
    units_until_next_unlock: int
    buy_quantity: int = 0
    free_quantity: int = 0
    offer_product_id: int | None = None


@dataclass(frozen=True)
class TransactionReceipt:
    """Result of a committed purchase."""

    transaction_id: int
    total_q: int
    created_at: datetime
    apply_offer: bool
    offer_id: int | None
    lines: list[LineResult]
    status: RewardStatus

    @property
    def free_used(self) -> int:
        return sum(line.free_quantity for line in self.lines)

    @property
    def free_earned(self) -> int:
        return sum(line.earned for line in self.lines)


@dataclass(frozen=True)
class InvoiceLine:
    """Invoice row."""

    product_id: int
    product_name: str
    quantity: int
    paid_quantity: int
    free_quantity: int
    unit_price_q: int
    line_total_q: int
    discount_q: int


@dataclass(frozen=True)
class Invoice:
    """Printable view of a committed transaction."""

    transaction_id: int
    customer_name: str
    customer_mobile: str
    created_at: datetime
    total_q: int
    lines: list[InvoiceLine]
    units_requested: int
    units_paid: int
    units_free: int
    discount_q: int


@dataclass(frozen=True)
class CustomerActivity:
    """Customer history with page stats and reward status."""

    customer_id: int
    name: str
    mobile: str
    role_id: int | None
    role_name: str
    transactions: list[dict] = field(default_factory=list)
    total_units: int = 0
    transaction_count: int = 0
    rewards: RewardStatus | None = None
