"""
Product image resolution.
"""
from typing import Dict, Iterable, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from repufrenos.config import get_settings
from repufrenos.schemas.product import Product, ProductView
from repufrenos.services import site_settings

# Uploaded default images fill these categories when no category image is set
DEFAULT_IMAGE_CATEGORIES = {
    "pastilla": "Pastillas",
    "disco": "Discos",
}


def resolve_product_image(product: Product, category_images: Mapping[str, str], placeholder: Optional[str] = None) -> str:
    """Explicit product image, then the category default, then the placeholder."""
    if product.image_url:
        return product.image_url
    if category_images.get(product.category):
        return category_images[product.category]
    return placeholder or get_settings().placeholder_image_url


async def get_category_images(db: AsyncSession) -> Dict[str, str]:
    appearance = await site_settings.get_appearance(db)
    images = dict(appearance.category_images)
    for image_type, category in DEFAULT_IMAGE_CATEGORIES.items():
        if not images.get(category):
            url = await site_settings.get_setting(db, site_settings.DEFAULT_IMAGE_KEYS[image_type])
            if url:
                images[category] = url
    return images


def with_images(products: Iterable[Product], category_images: Mapping[str, str]) -> List[ProductView]:
    placeholder = get_settings().placeholder_image_url
    return [
        ProductView(
            **product.model_dump(),
            resolved_image_url=resolve_product_image(product, category_images, placeholder),
        )
        for product in products
    ]
