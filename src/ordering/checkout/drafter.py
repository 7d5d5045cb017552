"""Order drafting and submission.

Checkout is a one-shot transformation: a cart snapshot plus the shopper's
shipping and payment choices become an immutable ``OrderDraft``, which is
submitted once to the order store. The cart is cleared only after the store
confirms the order; a failed submission keeps the draft so the shopper can
retry without re-entering shipping details.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from protean.exceptions import ValidationError

from ordering.cart.line_item import LineItem
from ordering.cart.totals import cart_total
from ordering.checkout.shipping import REQUIRED_SHIPPING_FIELDS, PaymentMethod, ShippingInfo, ShippingMethod
from ordering.domain import logger
from shared.exceptions import CollaboratorError


@dataclass(frozen=True)
class OrderDraft:
    """Immutable order submission, built once and submitted once."""

    user_id: str
    user_email: str | None
    line_items: tuple[LineItem, ...]
    total: int
    shipping: ShippingInfo
    payment_method: str
    notes: str = ""
    draft_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_payload(self) -> dict:
        """Order-store payload; new orders start processing with payment pending."""
        return {
            "draft_id": self.draft_id,
            "user_id": self.user_id,
            "user_email": self.user_email,
            "items": [item.to_dict() for item in self.line_items],
            "total": self.total,
            "shipping": self.shipping.to_dict(),
            "payment": {"method": self.payment_method, "status": "pending"},
            "status": "processing",
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
        }


def _choice_value(value, choices, default):
    if value is None or value == "":
        return default.value
    if isinstance(value, choices):
        return value.value
    return str(value).strip().lower()


class OrderDrafter:
    def __init__(self, cart, store, session) -> None:
        self._cart = cart
        self._store = store
        self._session = session
        self._pending: OrderDraft | None = None
        self._submitted: set[str] = set()

    @property
    def pending(self) -> OrderDraft | None:
        """The most recent draft that has not been submitted successfully."""
        return self._pending

    def draft(self, cart_snapshot, shipping_info, payment_method, notes="") -> OrderDraft:
        """Validate checkout input and build an ``OrderDraft``.

        Raises ``ValidationError`` listing every problem found; the cart is
        never modified here.
        """
        user = self._session.current_user
        data = shipping_info.to_dict() if isinstance(shipping_info, ShippingInfo) else dict(shipping_info or {})
        if user is not None:
            if data.get("name") is None:
                data["name"] = user.display_name
            if not data.get("email"):
                data["email"] = user.email

        errors: dict[str, list[str]] = {}
        if user is None:
            errors["user"] = ["Sign in to place an order"]
        if not cart_snapshot:
            errors["cart"] = ["Cannot draft an order from an empty cart"]

        for name in REQUIRED_SHIPPING_FIELDS:
            value = data.get(name)
            if value is None or not str(value).strip():
                errors[name] = ["is required"]

        method = _choice_value(data.get("method"), ShippingMethod, ShippingMethod.JNE)
        if method not in {m.value for m in ShippingMethod}:
            errors["method"] = [f"Unknown shipping method: {method}"]

        payment = _choice_value(payment_method, PaymentMethod, PaymentMethod.TRANSFER)
        if payment not in {m.value for m in PaymentMethod}:
            errors["payment_method"] = [f"Unknown payment method: {payment}"]

        if errors:
            raise ValidationError(errors)

        shipping = ShippingInfo(
            name=str(data["name"]).strip(),
            email=data.get("email") or None,
            phone=str(data["phone"]).strip(),
            address=str(data["address"]).strip(),
            city=str(data["city"]).strip(),
            postal_code=str(data["postal_code"]).strip(),
            method=method,
        )
        line_items = tuple(cart_snapshot)
        draft = OrderDraft(
            user_id=user.uid,
            user_email=user.email,
            line_items=line_items,
            total=cart_total(line_items),
            shipping=shipping,
            payment_method=payment,
            notes=(notes or "").strip(),
        )
        self._pending = draft
        logger.info("order_drafted", draft_id=draft.draft_id, user_id=user.uid, total=draft.total)
        return draft

    async def submit(self, draft: OrderDraft) -> str:
        """Hand the draft to the order store and clear the cart on success."""
        if draft.draft_id in self._submitted:
            raise ValidationError({"draft": ["Order draft has already been submitted"]})

        try:
            order_id = await self._store.create(draft.to_payload())
        except CollaboratorError as exc:
            self._pending = draft
            logger.warning("order_submit_failed", draft_id=draft.draft_id, error=str(exc))
            raise

        self._submitted.add(draft.draft_id)
        if self._pending is draft:
            self._pending = None

        try:
            self._cart.clear()
        except CollaboratorError as exc:
            # The order is placed; only the persisted cart copy is out of date
            logger.error("cart_clear_after_order_failed", order_id=order_id, error=str(exc))

        logger.info("order_submitted", order_id=order_id, draft_id=draft.draft_id)
        return order_id
