"""
Admin panel settings kept in the ``settings`` key-value table.
"""
import json
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from repufrenos.config import get_settings
from repufrenos.log import get_logger
from repufrenos.models.setting import Setting
from repufrenos.schemas.admin import AppearanceSettings, ContactInfo

logger = get_logger(__name__)

WHATSAPP_INFO_KEY = "whatsappInfo"
LEGACY_WHATSAPP_NUMBER_KEY = "whatsappNumber"
HOME_IMAGE_KEY = "homeImageUrl"
CATEGORY_IMAGES_KEY = "categoryImages"
DEFAULT_IMAGE_KEYS = {
    "pastilla": "defaultPastillaImageUrl",
    "disco": "defaultDiscoImageUrl",
}


async def get_setting(db: AsyncSession, key: str) -> Optional[str]:
    row = await db.get(Setting, key)
    return row.value if row is not None else None


async def set_setting(db: AsyncSession, key: str, value: Optional[str]) -> None:
    """Upsert one setting and commit."""
    row = await db.get(Setting, key)
    if row is None:
        db.add(Setting(key=key, value=value))
    else:
        row.value = value
    await db.commit()


async def delete_setting(db: AsyncSession, key: str) -> None:
    row = await db.get(Setting, key)
    if row is not None:
        await db.delete(row)
        await db.commit()


async def get_json_setting(db: AsyncSession, key: str, default: Any = None) -> Any:
    """Decode a JSON setting. Unreadable values fall back to ``default``."""
    raw = await get_setting(db, key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.error("Error parsing setting %r as JSON, using default", key)
        return default


async def set_json_setting(db: AsyncSession, key: str, value: Any) -> None:
    await set_setting(db, key, json.dumps(value, ensure_ascii=False))


async def get_contact_info(db: AsyncSession) -> ContactInfo:
    """
    WhatsApp contact for the storefront.

    Falls back to the legacy bare number, then to the configured default.
    """
    settings = get_settings()
    info = await get_json_setting(db, WHATSAPP_INFO_KEY)
    if isinstance(info, dict):
        return ContactInfo(
            name=info.get("name") or settings.default_contact_name,
            number=info.get("number") or settings.default_whatsapp_number,
        )

    number = await get_setting(db, LEGACY_WHATSAPP_NUMBER_KEY)
    return ContactInfo(
        name=settings.default_contact_name,
        number=number or settings.default_whatsapp_number,
    )


async def save_contact_info(db: AsyncSession, info: ContactInfo) -> None:
    await set_json_setting(db, WHATSAPP_INFO_KEY, info.model_dump())
    await delete_setting(db, LEGACY_WHATSAPP_NUMBER_KEY)


async def get_appearance(db: AsyncSession) -> AppearanceSettings:
    category_images = await get_json_setting(db, CATEGORY_IMAGES_KEY, {})
    if not isinstance(category_images, dict):
        category_images = {}
    return AppearanceSettings(
        home_image_url=await get_setting(db, HOME_IMAGE_KEY) or get_settings().home_placeholder_url,
        category_images=category_images,
    )


async def save_appearance(db: AsyncSession, appearance: AppearanceSettings) -> None:
    if appearance.home_image_url:
        await set_setting(db, HOME_IMAGE_KEY, appearance.home_image_url)
    await set_json_setting(db, CATEGORY_IMAGES_KEY, appearance.category_images)
