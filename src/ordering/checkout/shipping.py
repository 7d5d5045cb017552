"""Checkout choices: where the order goes and how it is paid."""

from enum import Enum

from protean.fields import String, Text

from ordering.domain import ordering


class ShippingMethod(Enum):
    JNE = "jne"
    JNT = "jnt"
    SICEPAT = "sicepat"
    NINJA = "ninja"


class PaymentMethod(Enum):
    TRANSFER = "transfer"
    QRIS = "qris"
    COD = "cod"


REQUIRED_SHIPPING_FIELDS = ("name", "phone", "address", "city", "postal_code")


@ordering.value_object
class ShippingInfo:
    """Delivery details captured at checkout.

    Once recorded on an order the details are immutable, whatever happens to
    the shopper's profile afterwards.
    """

    name = String(required=True, max_length=255)
    email = String(max_length=255)
    phone = String(required=True, max_length=50)
    address = Text(required=True)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    method = String(choices=ShippingMethod, default=ShippingMethod.JNE.value)
