"""
Pydantic schemas for Product.
"""
from pydantic import Field
from typing import List, Optional

from repufrenos.schemas.common import CamelModel


class ProductBase(CamelModel):
    """Base product schema with common fields."""
    code: str = ""
    name: str = Field(min_length=1)
    brand: str
    model: str = ""
    compatibility: str = ""
    price: float = Field(ge=0)
    category: str
    is_featured: bool = False
    image_url: Optional[str] = None
    is_on_sale: bool = False
    sale_price: Optional[float] = None

    @property
    def unit_price(self) -> float:
        """Price charged per unit: the sale price when the product is on sale."""
        if self.is_on_sale and self.sale_price is not None and self.sale_price > 0:
            return self.sale_price
        return self.price


class ProductSave(ProductBase):
    """Schema for creating or updating a product. No id means a new product."""
    id: Optional[int] = None


class Product(ProductBase):
    """Schema for product responses."""
    id: int


class ProductView(Product):
    """Product with its display image already resolved."""
    resolved_image_url: str


class ProductPage(CamelModel):
    items: List[ProductView]
    total: int
    page: int
    per_page: int
