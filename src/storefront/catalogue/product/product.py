"""Product aggregate root.

Stock is the one contended value in the catalogue. It only moves through
``debit_stock`` (order placement), ``restore_stock`` (cancellation or
deletion of an order) and ``set_stock`` (administrator correction), and it
can never drop below zero.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.catalogue.product.events import StockDebited, StockLevelSet, StockRestored
from storefront.domain import storefront
from storefront.shared.errors import InsufficientStockError
from storefront.shared.money import round_money


class ProductType(Enum):
    NORMAL = "normal"
    FEATURED = "featured"
    BEST_SELLER = "bestSeller"
    SPECIAL_OFFER = "specialOffer"


# Attributes an administrator may change through a partial update
_UPDATABLE = (
    "name",
    "description",
    "price",
    "subcategory_id",
    "product_type",
    "featured",
    "best_seller",
    "special_offer",
    "discount",
    "is_active",
)


@storefront.aggregate
class Product:
    name: String(required=True, max_length=200)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    subcategory_id: Identifier(required=True)
    images: Text(default="[]")  # JSON: list of image URLs
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    product_type: String(choices=ProductType, default=ProductType.NORMAL.value)
    featured: Boolean(default=False)
    best_seller: Boolean(default=False)
    special_offer: Boolean(default=False)
    discount: Float(default=0.0, min_value=0.0, max_value=100.0)
    price_after_discount: Float(default=0.0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def discounted_price_follows_price(self):
        expected = round_money(self.price * (1 - (self.discount or 0.0) / 100))
        if self.price_after_discount != expected:
            raise ValidationError({"price_after_discount": ["Discounted price is out of date"]})

    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        subcategory_id,
        images=None,
        stock=0,
        product_type=None,
        featured=False,
        best_seller=False,
        special_offer=False,
        discount=0.0,
    ):
        now = datetime.now()
        discount = discount or 0.0
        return cls(
            name=name.strip(),
            description=description,
            price=price,
            subcategory_id=subcategory_id,
            images=json.dumps(images or []),
            stock=stock or 0,
            product_type=product_type or ProductType.NORMAL.value,
            featured=bool(featured),
            best_seller=bool(best_seller),
            special_offer=bool(special_offer),
            discount=discount,
            price_after_discount=round_money(price * (1 - discount / 100)),
            created_at=now,
            updated_at=now,
        )

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def update(self, images=None, **changes):
        """Apply a partial update. Unknown or ``None`` values are ignored."""
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        values = {key: value for key, value in changes.items() if value is not None}
        if "name" in values:
            values["name"] = values["name"].strip()

        price = values.pop("price", self.price)
        discount = values.pop("discount", self.discount or 0.0)
        with atomic_change(self):
            self.price = price
            self.discount = discount
            self.price_after_discount = round_money(price * (1 - discount / 100))
            for key, value in values.items():
                setattr(self, key, value)
            if images is not None:
                self.images = json.dumps(images)
            self.updated_at = datetime.now()

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def ensure_available(self, quantity: int) -> None:
        if quantity > self.stock:
            raise InsufficientStockError(
                product_id=str(self.id),
                product_name=self.name,
                available=self.stock,
                requested=quantity,
            )

    def debit_stock(self, quantity: int, order_id: str) -> None:
        """Take ``quantity`` units out of stock, refusing to go below zero."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self.ensure_available(quantity)

        self.stock = self.stock - quantity
        now = datetime.now(UTC)
        self.raise_(
            StockDebited(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining_stock=self.stock,
                debited_at=now,
            )
        )

    def restore_stock(self, quantity: int, order_id: str) -> None:
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        self.stock = self.stock + quantity
        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                new_stock=self.stock,
                restored_at=datetime.now(UTC),
            )
        )

    def set_stock(self, quantity: int) -> None:
        if quantity is None or quantity < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous = self.stock
        self.stock = quantity
        self.updated_at = datetime.now()
        self.raise_(
            StockLevelSet(
                product_id=str(self.id),
                previous_stock=previous,
                new_stock=quantity,
                set_at=datetime.now(UTC),
            )
        )
