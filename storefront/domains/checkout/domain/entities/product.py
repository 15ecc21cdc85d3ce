"""
Product Entity

Catalog view of a product as the checkout needs it: list price, discount
source and stock. Catalog management itself lives elsewhere.
"""

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.domain import Entity, InsufficientStockException

from ..value_objects.discount import ProductDiscount, product_discount_from_fields


@dataclass(kw_only=True, eq=False)
class Product(Entity[int]):
    """
    Product available for purchase.

    Prices are integer cents.
    """

    name: str
    price: int
    picture_url: str = ""
    discount_percentage: Decimal | None = None
    promotional_price: int | None = None
    quantity_in_stock: int = 0

    @property
    def discount(self) -> ProductDiscount:
        """Discount source for this product."""
        return product_discount_from_fields(self.discount_percentage, self.promotional_price)

    @property
    def final_price(self) -> int:
        """Unit price after the product-level discount."""
        return self.discount.final_price(self.price)

    def has_stock(self, quantity: int) -> bool:
        """Check if the requested quantity is available."""
        return self.quantity_in_stock >= quantity

    def remove_stock(self, quantity: int) -> None:
        """
        Take units out of stock.

        Raises:
            InsufficientStockException: If fewer units are available
        """
        if not self.has_stock(quantity):
            raise InsufficientStockException(
                product_id=self.id or 0,
                requested=quantity,
                available=self.quantity_in_stock,
            )
        self.quantity_in_stock -= quantity
        self.touch()
