"""LineItem value object: one cart entry for a product variant.

Amounts are whole currency units. The stock ceiling travels with the item so
callers can clamp what they add; the cart itself only enforces the lower
bound on quantity.
"""

from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text

from ordering.domain import ordering

_VARIANT_LABELS = {
    "decant5ml": "Decant 5ml",
    "decant10ml": "Decant 10ml",
}


def variant_label_for(product, variant_key):
    """Human readable label for a catalog product's variant."""
    if variant_key == "bottle":
        volume = product.get("variants", {}).get("bottle", {}).get("volume")
        return f"Bottle {volume}ml" if volume else "Bottle"
    return _VARIANT_LABELS.get(variant_key, "")


@ordering.value_object
class LineItem:
    product_id = Identifier(required=True)
    variant_key = String(required=True, max_length=50)
    variant_label = String(max_length=100)
    unit_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    stock_ceiling = Integer(min_value=0)
    image_ref = Text()
    display_name = String(max_length=255)

    @property
    def key(self):
        """Uniqueness key within a cart."""
        return (str(self.product_id), self.variant_key)

    @property
    def subtotal(self):
        return self.unit_price * self.quantity

    def with_quantity(self, quantity):
        """Return a copy of this item carrying ``quantity``."""
        return LineItem(
            product_id=self.product_id,
            variant_key=self.variant_key,
            variant_label=self.variant_label,
            unit_price=self.unit_price,
            quantity=quantity,
            stock_ceiling=self.stock_ceiling,
            image_ref=self.image_ref,
            display_name=self.display_name,
        )

    # -------------------------------------------------------------------
    # Persisted shape
    # -------------------------------------------------------------------
    def to_record(self):
        """Serialize to the JSON shape kept in the cart store."""
        return {
            "id": str(self.product_id),
            "variant": self.variant_key,
            "variantLabel": self.variant_label,
            "price": self.unit_price,
            "quantity": self.quantity,
            "stock": self.stock_ceiling,
            "image": self.image_ref,
            "name": self.display_name,
        }

    @classmethod
    def from_record(cls, record):
        if not isinstance(record, dict):
            raise ValidationError({"item": ["Cart entry must be an object"]})
        return cls(
            product_id=record.get("id"),
            variant_key=record.get("variant"),
            variant_label=record.get("variantLabel"),
            unit_price=record.get("price"),
            quantity=record.get("quantity"),
            stock_ceiling=record.get("stock"),
            image_ref=record.get("image"),
            display_name=record.get("name"),
        )

    @classmethod
    def from_product(cls, product, variant_key, quantity=1):
        """Build a line item from a catalog product document.

        ``product`` carries ``id``, ``name``, ``images`` and a ``variants``
        mapping whose entries hold ``sellingPrice`` and ``stock``.
        """
        variant = product.get("variants", {}).get(variant_key)
        if variant is None:
            raise ValidationError({"variant_key": [f"Product has no variant {variant_key!r}"]})

        images = product.get("images") or []
        return cls(
            product_id=product.get("id"),
            variant_key=variant_key,
            variant_label=variant_label_for(product, variant_key),
            unit_price=variant.get("sellingPrice"),
            quantity=quantity,
            stock_ceiling=variant.get("stock"),
            image_ref=images[0] if images else None,
            display_name=product.get("name"),
        )
