"""
Shopping cart kept in the client store under the ``cart`` key.
"""
from typing import List

from pydantic import ValidationError

from repufrenos.log import get_logger
from repufrenos.schemas.cart import CartItem, CartView
from repufrenos.schemas.product import Product
from repufrenos.storage import ClientStore

logger = get_logger(__name__)

CART_KEY = "cart"


class Cart:
    """A client's cart. Every mutation is written straight back to the store."""

    def __init__(self, store: ClientStore):
        self.store = store
        self.items: List[CartItem] = self._load()

    def _load(self) -> List[CartItem]:
        raw = self.store.get_json(CART_KEY, [])
        if not isinstance(raw, list):
            return []
        try:
            return [CartItem.model_validate(item) for item in raw]
        except ValidationError:
            logger.error("Stored cart is unreadable, starting with an empty cart")
            return []

    def _save(self) -> None:
        self.store.set_json(CART_KEY, [item.model_dump(by_alias=True) for item in self.items])

    def _find(self, product_id: int):
        return next((item for item in self.items if item.id == product_id), None)

    def add(self, product: Product) -> CartItem:
        """Add one unit. A product already in the cart gets its quantity bumped."""
        item = self._find(product.id)
        if item is not None:
            item.quantity += 1
        else:
            item = CartItem(**product.model_dump(), quantity=1)
            self.items.append(item)
        self._save()
        logger.info("Added %s to cart", product.name)
        return item

    def remove(self, product_id: int) -> None:
        self.items = [item for item in self.items if item.id != product_id]
        self._save()

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity. Zero or less removes the line."""
        if quantity <= 0:
            self.remove(product_id)
            return
        item = self._find(product_id)
        if item is not None:
            item.quantity = quantity
            self._save()

    def clear(self) -> None:
        self.items = []
        self._save()

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> float:
        return sum(item.line_total for item in self.items)

    def view(self) -> CartView:
        return CartView(items=list(self.items), count=self.count, total=self.total)
