"""
Tests for the shopping cart.
"""
import unittest

from repufrenos.services.cart import CART_KEY, Cart
from repufrenos.storage import MemoryStore
from tests.support import make_product


class TestCart(unittest.TestCase):

    def setUp(self):
        self.store = MemoryStore()
        self.cart = Cart(self.store)
        self.pads = make_product(id=1, price=35000)
        self.discs = make_product(id=2, name="Disco Freno", price=90000, is_on_sale=True, sale_price=80000)

    def test_adding_same_product_bumps_quantity(self):
        self.cart.add(self.pads)
        self.cart.add(self.pads)
        self.assertEqual(len(self.cart.items), 1)
        self.assertEqual(self.cart.items[0].quantity, 2)
        self.assertEqual(self.cart.count, 2)

    def test_total_uses_sale_price(self):
        self.cart.add(self.pads)
        self.cart.add(self.discs)
        self.assertEqual(self.cart.total, 35000 + 80000)

    def test_zero_sale_price_is_ignored(self):
        self.cart.add(make_product(id=3, price=20000, is_on_sale=True, sale_price=0))
        self.assertEqual(self.cart.total, 20000)

    def test_quantity_zero_removes_line(self):
        self.cart.add(self.pads)
        self.cart.update_quantity(self.pads.id, 0)
        self.assertEqual(self.cart.items, [])

    def test_update_quantity(self):
        self.cart.add(self.pads)
        self.cart.update_quantity(self.pads.id, 4)
        self.assertEqual(self.cart.count, 4)
        self.assertEqual(self.cart.total, 4 * 35000)

    def test_cart_is_persisted(self):
        self.cart.add(self.pads)
        reloaded = Cart(self.store)
        self.assertEqual([item.id for item in reloaded.items], [self.pads.id])

    def test_clear(self):
        self.cart.add(self.pads)
        self.cart.clear()
        self.assertEqual(Cart(self.store).view().count, 0)

    def test_unreadable_cart_starts_empty(self):
        store = MemoryStore({CART_KEY: '[{"id": "x"}]'})
        self.assertEqual(Cart(store).items, [])


if __name__ == "__main__":
    unittest.main()
