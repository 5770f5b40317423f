"""
Tests for the product catalog.
"""
import io
import unittest
from unittest import mock

from repufrenos import seed
from repufrenos.database import SessionLocal
from repufrenos.schemas.product import ProductSave
from repufrenos.services import catalog, site_settings
from repufrenos.services.images import get_category_images, resolve_product_image
from tests.support import make_product, reset_database, run


async def _with_session(func, *args, **kwargs):
    async with SessionLocal() as db:
        return await func(db, *args, **kwargs)


def call(func, *args, **kwargs):
    """Run a catalog coroutine function in a fresh session."""
    return run(_with_session(func, *args, **kwargs))


class TestFiltering(unittest.TestCase):

    def setUp(self):
        self.products = [
            make_product(id=1, name="Pastilla Freno", brand="Baleno", compatibility="Suzuki Alto"),
            make_product(id=2, name="disco ventilado", brand="ATE", category="Discos"),
            make_product(id=3, name="Disco Trasero", brand="TRW", category="Discos", is_featured=True),
        ]

    def test_search_is_case_insensitive_over_fields(self):
        self.assertEqual([p.id for p in catalog.filter_products(self.products, "suzuki")], [1])
        self.assertEqual([p.id for p in catalog.filter_products(self.products, "trw")], [3])

    def test_category_filter_and_name_order(self):
        result = catalog.filter_products(self.products, category="Discos")
        self.assertEqual([p.id for p in result], [3, 2])

    def test_all_category(self):
        self.assertEqual(len(catalog.filter_products(self.products, category="all")), 3)

    def test_paginate(self):
        self.assertEqual(catalog.paginate([1, 2, 3, 4, 5], 2, 2), [3, 4])
        self.assertEqual(catalog.paginate([1, 2], 3, 2), [])

    def test_categories_and_featured(self):
        self.assertEqual(catalog.list_categories(self.products), ["Pastillas", "Discos"])
        self.assertEqual([p.id for p in catalog.featured_products(self.products)], [3])


class TestImages(unittest.TestCase):

    def test_resolution_order(self):
        images = {"Pastillas": "/images/pastillas.png"}
        self.assertEqual(resolve_product_image(make_product(image_url="/a.png"), images, "/ph.png"), "/a.png")
        self.assertEqual(resolve_product_image(make_product(), images, "/ph.png"), "/images/pastillas.png")
        self.assertEqual(resolve_product_image(make_product(category="Discos"), images, "/ph.png"), "/ph.png")

    def test_uploaded_defaults_fill_missing_categories(self):
        reset_database()
        call(site_settings.set_setting, site_settings.DEFAULT_IMAGE_KEYS["disco"], "/images/defaults/default_disco.png")
        images = call(get_category_images)
        self.assertEqual(images, {"Discos": "/images/defaults/default_disco.png"})


class TestCatalogDatabase(unittest.TestCase):

    def setUp(self):
        reset_database(seed=False)

    def test_seed_loads_bundled_catalog_once(self):
        self.assertEqual(call(catalog.seed_catalog), len(catalog.load_static_catalog()))
        self.assertEqual(call(catalog.seed_catalog), 0)

    def test_stale_categories_trigger_reseed(self):
        call(catalog.save_product, ProductSave(name="Tambor", brand="X", price=1000, category="Tambores"))
        inserted = call(catalog.seed_catalog)
        self.assertGreater(inserted, 0)
        categories = {p.category for p in call(catalog.get_products)}
        self.assertEqual(categories, set(catalog.MASTER_CATEGORIES))

    def test_save_new_product_gets_next_id(self):
        call(catalog.seed_catalog)
        result = call(catalog.save_product, ProductSave(name="Pastilla Nueva", brand="Bosch", price=15000, category="Pastillas"))
        self.assertTrue(result.success)
        ids = [p.id for p in call(catalog.get_products)]
        self.assertEqual(ids[-1], max(ids))
        self.assertEqual(len(ids), len(catalog.load_static_catalog()) + 1)

    def test_sale_price_dropped_when_not_on_sale(self):
        call(catalog.save_product, ProductSave(
            id=50, name="Disco", brand="TRW", price=90000, category="Discos", is_on_sale=False, sale_price=80000,
        ))
        product = call(catalog.get_product_by_id, 50)
        self.assertIsNone(product.sale_price)
        self.assertEqual(product.price, 90000)

    def test_seed_drops_non_positive_sale_price(self):
        catalog_rows = [
            ProductSave(id=1, name="Disco", brand="TRW", price=90000, category="Discos", is_on_sale=True, sale_price=-5),
            ProductSave(id=2, name="Pastilla", brand="Bosch", price=20000, category="Pastillas", is_on_sale=True, sale_price=15000),
        ]
        call(catalog.seed_catalog, force=True, catalog=catalog_rows)
        self.assertIsNone(call(catalog.get_product_by_id, 1).sale_price)
        self.assertEqual(call(catalog.get_product_by_id, 2).sale_price, 15000)

    def test_update_existing_product(self):
        call(catalog.seed_catalog)
        original = call(catalog.get_product_by_id, 1)
        changed = ProductSave(**original.model_dump(exclude={"name"}), name="Pastilla Renombrada")
        call(catalog.save_product, changed)
        self.assertEqual(call(catalog.get_product_by_id, 1).name, "Pastilla Renombrada")

    def test_delete_product(self):
        call(catalog.seed_catalog)
        self.assertTrue(call(catalog.delete_product, 1).success)
        self.assertIsNone(call(catalog.get_product_by_id, 1))


class TestSeedCommand(unittest.TestCase):

    def setUp(self):
        reset_database(seed=False)

    def test_force_reload(self):
        with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
            self.assertEqual(seed.main(["--force"]), 0)
        self.assertIn("Seeding complete", out.getvalue())
        self.assertEqual(len(call(catalog.get_products)), len(catalog.load_static_catalog()))


if __name__ == "__main__":
    unittest.main()
