"""Tests for building order drafts from a cart snapshot."""

import dataclasses

import pytest
from ordering.checkout.drafter import OrderDrafter
from ordering.checkout.session import StaticSession
from ordering.checkout.shipping import PaymentMethod, ShippingInfo
from ordering.order.store import FakeOrderStore
from protean.exceptions import ValidationError


@pytest.fixture()
def drafter(cart, session):
    return OrderDrafter(cart, FakeOrderStore(), session)


class TestDraft:
    def test_draft_captures_snapshot_and_total(self, cart, drafter, make_item, shipping):
        cart.add(make_item(quantity=3))
        draft = drafter.draft(cart.snapshot(), shipping, "transfer", notes=" gift wrap ")
        assert draft.line_items == cart.snapshot()
        assert draft.total == 1500000
        assert draft.payment_method == "transfer"
        assert draft.notes == "gift wrap"
        assert draft.user_id == "user-001"
        assert draft.shipping.city == "Bandung"

    def test_draft_is_immutable(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        draft = drafter.draft(cart.snapshot(), shipping, "qris")
        with pytest.raises(dataclasses.FrozenInstanceError):
            draft.total = 0

    def test_later_cart_changes_do_not_alter_draft(self, cart, drafter, make_item, shipping):
        cart.add(make_item(quantity=1))
        draft = drafter.draft(cart.snapshot(), shipping, "transfer")
        cart.add(make_item(quantity=5))
        cart.add(make_item(product_id="prod-B"))
        assert len(draft.line_items) == 1
        assert draft.line_items[0].quantity == 1
        assert draft.total == 500000

    def test_draft_becomes_pending(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        draft = drafter.draft(cart.snapshot(), shipping, "cod")
        assert drafter.pending is draft

    def test_accepts_enum_and_value_object(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        draft = drafter.draft(cart.snapshot(), ShippingInfo(**shipping), PaymentMethod.QRIS)
        assert draft.payment_method == "qris"
        assert draft.shipping.name == "Rina Wijaya"

    def test_name_and_email_prefilled_from_user(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        del shipping["name"]
        draft = drafter.draft(cart.snapshot(), shipping, "transfer")
        assert draft.shipping.name == "Rina Wijaya"
        assert draft.shipping.email == "rina@example.com"

    def test_shipping_method_defaults_to_jne(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        del shipping["method"]
        assert drafter.draft(cart.snapshot(), shipping, "transfer").shipping.method == "jne"


class TestDraftValidation:
    def test_empty_cart_rejected_and_cart_unchanged(self, cart, cart_store, drafter, shipping):
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert "cart" in exc.value.messages
        assert cart.is_empty
        assert cart_store.writes == []
        assert drafter.pending is None

    @pytest.mark.parametrize("field", ["name", "phone", "address", "city", "postal_code"])
    def test_blank_required_field_rejected(self, cart, drafter, make_item, shipping, field):
        cart.add(make_item())
        shipping[field] = "   "
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert field in exc.value.messages

    def test_missing_field_rejected(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        del shipping["postal_code"]
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert "postal_code" in exc.value.messages

    def test_all_problems_reported_together(self, cart, drafter, shipping):
        shipping["phone"] = ""
        shipping["city"] = ""
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert {"cart", "phone", "city"} <= set(exc.value.messages)

    def test_unknown_payment_method_rejected(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "cheque")
        assert "payment_method" in exc.value.messages

    def test_unknown_shipping_method_rejected(self, cart, drafter, make_item, shipping):
        cart.add(make_item())
        shipping["method"] = "camel"
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert "method" in exc.value.messages

    def test_guest_can_draft_after_login(self, cart, make_item, shipping, shopper):
        session = StaticSession()
        drafter = OrderDrafter(cart, FakeOrderStore(), session)
        cart.add(make_item())

        session.login(shopper)

        assert drafter.draft(cart.snapshot(), shipping, "transfer").user_id == "user-001"

    def test_logged_out_shopper_cannot_draft(self, cart, drafter, make_item, session, shipping):
        cart.add(make_item())
        session.logout()
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert "user" in exc.value.messages

    def test_guest_cannot_draft(self, cart, make_item, shipping):
        drafter = OrderDrafter(cart, FakeOrderStore(), StaticSession())
        cart.add(make_item())
        with pytest.raises(ValidationError) as exc:
            drafter.draft(cart.snapshot(), shipping, "transfer")
        assert "user" in exc.value.messages
