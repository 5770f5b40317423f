"""
Product catalog routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from repufrenos.auth import get_current_admin
from repufrenos.database import get_db
from repufrenos.schemas.cart import CheckoutLink
from repufrenos.schemas.common import ActionResult
from repufrenos.schemas.product import ProductPage, ProductSave, ProductView
from repufrenos.services import catalog, site_settings, whatsapp
from repufrenos.services.images import get_category_images, with_images

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=ProductPage)
async def list_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """
    Storefront listing: search, category filter, name order, pagination.
    """
    products = catalog.filter_products(await catalog.get_products(db), search, category)
    items = with_images(catalog.paginate(products, page, per_page), await get_category_images(db))
    return ProductPage(items=items, total=len(products), page=page, per_page=per_page)


@router.get("/categories", response_model=List[str])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """
    Categories present in the current catalog.
    """
    return catalog.list_categories(await catalog.get_products(db))


@router.get("/featured", response_model=List[ProductView])
async def list_featured(db: AsyncSession = Depends(get_db)):
    """
    Products flagged for the home page.
    """
    featured = catalog.featured_products(await catalog.get_products(db))
    return with_images(featured, await get_category_images(db))


@router.get("/{product_id}", response_model=ProductView)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get a specific product by ID.
    """
    product = await catalog.get_product_by_id(db, product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Producto no encontrado"
        )

    return with_images([product], await get_category_images(db))[0]


@router.get("/{product_id}/whatsapp", response_model=CheckoutLink)
async def product_whatsapp_link(product_id: int, db: AsyncSession = Depends(get_db)):
    """
    WhatsApp question about one product, sent to the shop contact.
    """
    product = await catalog.get_product_by_id(db, product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Producto no encontrado"
        )

    contact = await site_settings.get_contact_info(db)
    message = whatsapp.product_inquiry_message(product)
    return CheckoutLink(message=message, url=whatsapp.whatsapp_url(contact.number, message))


@router.put("/", response_model=ActionResult)
async def save_product(
    product: ProductSave,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(get_current_admin)
):
    """
    Create or update a product.
    """
    return await catalog.save_product(db, product)


@router.delete("/{product_id}", response_model=ActionResult)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(get_current_admin)
):
    """
    Delete a product.
    """
    return await catalog.delete_product(db, product_id)


@router.post("/seed", response_model=ActionResult)
async def seed_products(
    force: bool = False,
    db: AsyncSession = Depends(get_db),
    admin: str = Depends(get_current_admin)
):
    """
    Reload the bundled catalog.
    """
    await catalog.seed_catalog(db, force=force)
    return ActionResult(success=True)
