"""
Product catalog: database reads, admin upserts and storefront filtering.
"""
import json
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from repufrenos.log import get_logger
from repufrenos.models.product import Product as ProductModel
from repufrenos.schemas.common import ActionResult
from repufrenos.schemas.product import Product, ProductSave

logger = get_logger(__name__)

CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "products.json"
MASTER_CATEGORIES = ("Pastillas", "Discos")

T = TypeVar("T")


def load_static_catalog(path: Path = CATALOG_PATH) -> List[ProductSave]:
    """Read the bundled product list."""
    with open(path, encoding="utf-8") as fh:
        return [ProductSave.model_validate(item) for item in json.load(fh)]


def _to_schema(row: ProductModel) -> Product:
    product = Product.model_validate(row)
    # Some drivers hand back NUMERIC columns as strings or Decimals
    product.price = float(product.price)
    if product.sale_price is not None:
        product.sale_price = float(product.sale_price)
    return product


async def get_products(db: AsyncSession) -> List[Product]:
    """
    Fetch all products. Errors are logged and re-raised so a broken
    connection is visible instead of an empty catalog.
    """
    try:
        result = await db.execute(select(ProductModel).order_by(ProductModel.id))
    except SQLAlchemyError:
        logger.exception("Database query for all products failed. Check connection and credentials.")
        raise
    return [_to_schema(row) for row in result.scalars().all()]


async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[Product]:
    """Fetch a single product, or None when it does not exist."""
    try:
        row = await db.get(ProductModel, product_id)
    except SQLAlchemyError:
        logger.exception("Database query for product %s failed.", product_id)
        raise
    return _to_schema(row) if row is not None else None


def _row_values(product: ProductSave) -> dict:
    """Column values for a product. The sale price is kept only while on sale with a positive price."""
    values = product.model_dump(exclude={"id"})
    if not (product.is_on_sale and product.sale_price is not None and product.sale_price > 0):
        values["sale_price"] = None
    return values


async def _next_id(db: AsyncSession) -> int:
    result = await db.execute(select(func.max(ProductModel.id)))
    return (result.scalar() or 0) + 1


async def save_product(db: AsyncSession, product: ProductSave) -> ActionResult:
    """
    Create or update a product by primary key.

    The sale price is only stored while the product is on sale with a
    positive sale price.
    """
    values = _row_values(product)

    try:
        db_product = await db.get(ProductModel, product.id) if product.id is not None else None
        if db_product is None:
            product_id = product.id if product.id is not None else await _next_id(db)
            db.add(ProductModel(id=product_id, **values))
        else:
            for field, value in values.items():
                setattr(db_product, field, value)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to save product %s to database", product.id)
        return ActionResult(success=False, error="No se pudo guardar el producto en la base de datos.")

    logger.info("Saved product %s (%s)", product.id, product.name)
    return ActionResult(success=True)


async def delete_product(db: AsyncSession, product_id: int) -> ActionResult:
    """Delete a product by id. Deleting a missing product is not an error."""
    try:
        await db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to delete product %s from database", product_id)
        return ActionResult(success=False, error="No se pudo eliminar el producto de la base de datos.")
    return ActionResult(success=True)


async def seed_catalog(db: AsyncSession, force: bool = False, catalog: Optional[Sequence[ProductSave]] = None) -> int:
    """
    Load the static catalog into the products table.

    Runs when the table is empty, when ``force`` is set, or when a stored
    category is no longer part of the master list. Returns the number of
    products inserted (0 when nothing had to change).
    """
    result = await db.execute(select(ProductModel.category).distinct())
    stored_categories = set(result.scalars().all())

    stale = bool(stored_categories - set(MASTER_CATEGORIES))
    if stored_categories and not stale and not force:
        return 0

    if stale:
        logger.warning("Stored categories %s do not match %s, reloading catalog", sorted(stored_categories), MASTER_CATEGORIES)

    products = list(catalog) if catalog is not None else load_static_catalog()
    await db.execute(delete(ProductModel))
    for product in products:
        db.add(ProductModel(id=product.id, **_row_values(product)))
    await db.commit()
    logger.info("Seeded %d products", len(products))
    return len(products)


def filter_products(products: Iterable[Product], search: Optional[str] = None, category: Optional[str] = None) -> List[Product]:
    """Storefront search: substring match on name, brand, model or compatibility, then by category."""
    items = list(products)

    if search:
        term = search.lower()
        items = [
            p for p in items
            if term in p.name.lower()
            or term in p.brand.lower()
            or term in p.model.lower()
            or term in p.compatibility.lower()
        ]

    if category and category != "all":
        items = [p for p in items if p.category == category]

    return sorted(items, key=lambda p: p.name.lower())


def paginate(items: Sequence[T], page: int, per_page: int) -> List[T]:
    start = (max(page, 1) - 1) * per_page
    return list(items[start:start + per_page])


def list_categories(products: Iterable[Product]) -> List[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(p.category for p in products))


def featured_products(products: Iterable[Product]) -> List[Product]:
    return [p for p in products if p.is_featured]
