"""
Pydantic schemas for the shopping cart.
"""
from pydantic import Field
from typing import List

from repufrenos.schemas.common import CamelModel
from repufrenos.schemas.product import Product


class CartItem(Product):
    """A product line in the cart."""
    quantity: int = Field(ge=0)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class CartAdd(CamelModel):
    product_id: int


class CartQuantity(CamelModel):
    quantity: int


class CartView(CamelModel):
    items: List[CartItem]
    count: int
    total: float


class CheckoutLink(CamelModel):
    message: str
    url: str
