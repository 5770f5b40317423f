"""
Image uploads: local public directory or Cloudinary.
"""
import re
import time
from pathlib import Path
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from repufrenos.config import get_settings
from repufrenos.log import get_logger
from repufrenos.schemas.common import ActionResult

logger = get_logger(__name__)

DEFAULT_IMAGE_TYPES = ("pastilla", "disco")
DEFAULT_IMAGES_DIR = "images/defaults"
_UNSAFE_CHARS = re.compile(r"[^a-z0-9_.-]", re.IGNORECASE)


def sanitize_filename(name: str) -> str:
    return _UNSAFE_CHARS.sub("_", name)


def _extension(original_name: Optional[str]) -> str:
    return Path(original_name or "").suffix or ".png"


def _public_dir(public_dir: Optional[str]) -> Path:
    return Path(public_dir or get_settings().public_dir).resolve()


def upload_image(content: bytes, original_name: str, file_name: str, upload_dir: str,
                 public_dir: Optional[str] = None) -> ActionResult:
    """Write an image under ``<public>/<upload_dir>/`` and return its public URL."""
    if not file_name or not upload_dir:
        return ActionResult(success=False, error="Invalid input.")
    if not content:
        return ActionResult(success=False, error="Please select a file.")

    root = _public_dir(public_dir)
    target_dir = (root / upload_dir.strip("/")).resolve()
    if target_dir != root and root not in target_dir.parents:
        return ActionResult(success=False, error="Invalid input.")

    final_name = f"{sanitize_filename(file_name)}{_extension(original_name)}"
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / final_name).write_bytes(content)
    except OSError:
        logger.exception("Error uploading image %s", final_name)
        return ActionResult(success=False, error="Failed to upload image due to a server error.")

    url = "/" + target_dir.relative_to(root).joinpath(final_name).as_posix()
    logger.info("Image stored at %s", url)
    return ActionResult(success=True, url=url)


def upload_default_image(content: bytes, original_name: str, image_type: str,
                         public_dir: Optional[str] = None) -> ActionResult:
    """
    Replace the default image of a category type (``pastilla`` or ``disco``).

    The URL carries a timestamp so browsers fetch the new file.
    """
    if image_type not in DEFAULT_IMAGE_TYPES:
        return ActionResult(success=False, error="Invalid input.")
    if not content:
        return ActionResult(success=False, error="Please select a file.")

    target_dir = _public_dir(public_dir) / DEFAULT_IMAGES_DIR
    filename = f"default_{image_type}{_extension(original_name)}"
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / filename).write_bytes(content)
    except OSError:
        logger.exception("Error uploading default image %s", filename)
        return ActionResult(success=False, error="Failed to upload image.")

    return ActionResult(success=True, url=f"/{DEFAULT_IMAGES_DIR}/{filename}?v={int(time.time() * 1000)}")


def upload_image_to_cloud(data_url: str, file_name: str, upload_dir: str) -> ActionResult:
    """Upload a base64 data URL to Cloudinary, overwriting ``upload_dir/file_name``."""
    if not data_url.startswith("data:image/") or not file_name or not upload_dir:
        return ActionResult(success=False, error="Datos de entrada inválidos.")

    settings = get_settings()
    if not (settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret):
        logger.error("Cloudinary credentials are not configured")
        return ActionResult(
            success=False,
            error="Las variables de entorno de Cloudinary no están configuradas en el servidor.",
        )

    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    try:
        result = cloudinary.uploader.upload(
            data_url,
            public_id=file_name,
            folder=upload_dir,
            overwrite=True,
        )
    except CloudinaryError as exc:
        logger.exception("Error uploading image to Cloudinary")
        return ActionResult(success=False, error=str(exc) or "Error del servidor al subir la imagen.")

    logger.info("Image uploaded successfully to Cloudinary: %s", result["secure_url"])
    return ActionResult(success=True, url=result["secure_url"])
