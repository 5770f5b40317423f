"""
Public site settings plus ``robots.txt`` and ``sitemap.xml``.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from repufrenos.config import get_settings
from repufrenos.database import get_db
from repufrenos.schemas.admin import AppearanceSettings, ContactInfo
from repufrenos.services import site_settings

router = APIRouter(prefix="/site", tags=["site"])
root_router = APIRouter(tags=["site"])

SITEMAP_PAGES = (
    ("", "daily", "1.0"),
    ("/productos", "daily", "0.9"),
    ("/contacto", "monthly", "0.7"),
)


@router.get("/contact", response_model=ContactInfo)
async def contact_info(db: AsyncSession = Depends(get_db)):
    """
    WhatsApp contact shown on the storefront.
    """
    return await site_settings.get_contact_info(db)


@router.get("/appearance", response_model=AppearanceSettings)
async def appearance(db: AsyncSession = Depends(get_db)):
    return await site_settings.get_appearance(db)


@root_router.get("/robots.txt", response_class=PlainTextResponse)
async def robots():
    base_url = get_settings().base_url.rstrip("/")
    return "\n".join([
        "User-Agent: *",
        "Allow: /",
        "Disallow: /admin/",
        "",
        f"Sitemap: {base_url}/sitemap.xml",
        "",
    ])


@root_router.get("/sitemap.xml")
async def sitemap():
    base_url = get_settings().base_url.rstrip("/")
    last_modified = datetime.now(timezone.utc).isoformat()
    entries = "".join(
        "<url>"
        f"<loc>{base_url}{path}</loc>"
        f"<lastmod>{last_modified}</lastmod>"
        f"<changefreq>{frequency}</changefreq>"
        f"<priority>{priority}</priority>"
        "</url>"
        for path, frequency, priority in SITEMAP_PAGES
    )
    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{entries}</urlset>"
    )
    return Response(content=xml, media_type="application/xml")
