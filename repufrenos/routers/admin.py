"""
Admin panel routes. Every route requires an admin bearer token.
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from repufrenos.auth import get_current_admin
from repufrenos.config import get_admin_settings_for_form, save_env_settings
from repufrenos.database import get_db
from repufrenos.schemas.admin import AdminSettingsForm, AppearanceSettings, ContactInfo, EnvSettingsUpdate
from repufrenos.schemas.common import ActionResult
from repufrenos.services import site_settings, uploads

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(get_current_admin)])


class CloudUpload(BaseModel):
    file_as_data_url: str
    file_name: str
    upload_dir: str


@router.get("/env", response_model=AdminSettingsForm)
async def read_env_settings():
    """
    Admin users and SMTP settings as shown in the form. Passwords are never returned.
    """
    return get_admin_settings_for_form()


@router.put("/env", response_model=ActionResult)
async def update_env_settings(update: EnvSettingsUpdate):
    """
    Write admin users and SMTP settings to the settings file.
    Empty passwords keep the current value.
    """
    return save_env_settings(update.to_env())


@router.get("/contact", response_model=ContactInfo)
async def read_contact_info(db: AsyncSession = Depends(get_db)):
    return await site_settings.get_contact_info(db)


@router.put("/contact", response_model=ContactInfo)
async def update_contact_info(info: ContactInfo, db: AsyncSession = Depends(get_db)):
    """
    Update the WhatsApp contact used for checkout.
    """
    await site_settings.save_contact_info(db, info)
    return info


@router.get("/appearance", response_model=AppearanceSettings)
async def read_appearance(db: AsyncSession = Depends(get_db)):
    return await site_settings.get_appearance(db)


@router.put("/appearance", response_model=AppearanceSettings)
async def update_appearance(appearance: AppearanceSettings, db: AsyncSession = Depends(get_db)):
    """
    Update the home image and the per-category default images.
    """
    await site_settings.save_appearance(db, appearance)
    return await site_settings.get_appearance(db)


@router.post("/uploads/image", response_model=ActionResult)
async def upload_image(
    file: UploadFile = File(...),
    file_name: str = Form(...),
    upload_dir: str = Form(...),
):
    """
    Store an image in the public directory.
    """
    content = await file.read()
    return await run_in_threadpool(uploads.upload_image, content, file.filename, file_name, upload_dir)


@router.post("/uploads/default-image", response_model=ActionResult)
async def upload_default_image(
    file: UploadFile = File(...),
    type: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace the default image for brake pads (``pastilla``) or discs (``disco``).
    """
    content = await file.read()
    result = await run_in_threadpool(uploads.upload_default_image, content, file.filename, type)
    if result.success:
        await site_settings.set_setting(db, site_settings.DEFAULT_IMAGE_KEYS[type], result.url)
    return result


@router.post("/uploads/cloud", response_model=ActionResult)
async def upload_image_to_cloud(upload: CloudUpload):
    """
    Upload a data URL image to the hosted media service.
    """
    return await run_in_threadpool(
        uploads.upload_image_to_cloud, upload.file_as_data_url, upload.file_name, upload.upload_dir
    )
