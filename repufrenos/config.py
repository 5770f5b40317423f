"""
Configuration settings for the REPUFRENOS storefront.
Uses Pydantic for type-safe configuration management.

Two layers live here:

* ``Settings``: process configuration loaded once from the environment
  and ``.env`` (cached).
* The runtime settings file: ``KEY=value`` lines edited from the admin
  panel. It is re-read on every call so changes apply without a restart.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic_settings import BaseSettings

from repufrenos.log import get_logger
from repufrenos.schemas.admin import AdminSettingsForm, AdminUser, EnvSettings, SmtpFormSettings
from repufrenos.schemas.common import ActionResult

logger = get_logger(__name__)

MAX_ADMIN_USERS = 3
SECRET_KEYS_SUFFIXES = ("PASSWORD", "SMTP_PASS")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "REPUFRENOS.CL"
    app_version: str = "1.0.0"
    debug: bool = False
    base_url: str = "https://www.repufrenos.cl"

    # Database
    database_url: str = "postgresql+asyncpg://repufrenos:repufrenos@db:5432/repufrenos"

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # API
    api_v1_prefix: str = "/api/v1"

    # Files
    env_file_path: str = ".env"
    storage_dir: str = "storage"
    public_dir: str = "public"

    # Storefront
    default_whatsapp_number: str = "56912345678"
    default_contact_name: str = "Ventas"
    placeholder_image_url: str = "https://placehold.co/400x400.png"
    home_placeholder_url: str = "https://placehold.co/600x400.png"

    # Hosted email API
    hosted_email_api_url: str = "https://api.resend.com/emails"
    hosted_email_api_key: Optional[str] = None
    hosted_email_from: str = "REPUFRENOS.CL <onboarding@resend.dev>"
    hosted_email_recipients: Optional[str] = None

    # Hosted media (Cloudinary)
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def _env_path(path: Optional[str] = None) -> Path:
    return Path(path or get_settings().env_file_path).resolve()


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def read_env_file(path: Optional[str] = None) -> Dict[str, str]:
    """
    Parse a ``KEY=value`` settings file.

    Blank lines and ``#`` comments are skipped, values may contain ``=``
    and may be wrapped in matching quotes. A missing file is an empty mapping.
    """
    env_path = _env_path(path)
    try:
        content = env_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        logger.exception("Error reading settings file %s", env_path)
        return {}

    values: Dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if key:
            values[key] = _unquote(value.strip())
    return values


def get_env_settings(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> EnvSettings:
    """
    Read the settings file and merge it over the process environment.

    Values from the file take precedence. Admin users come from
    ``ADMIN_USER_{n}_USERNAME`` / ``ADMIN_USER_{n}_PASSWORD``; when none is
    set the legacy ``ADMIN_USERNAME`` / ``ADMIN_PASSWORD`` pair fills slot 1.
    """
    combined = dict(os.environ if environ is None else environ)
    combined.update(read_env_file(path))

    users = []
    multi_user_found = False
    for i in range(1, MAX_ADMIN_USERS + 1):
        username = combined.get(f"ADMIN_USER_{i}_USERNAME")
        if username:
            multi_user_found = True
            users.append(AdminUser(username=username, password=combined.get(f"ADMIN_USER_{i}_PASSWORD")))
        else:
            users.append(AdminUser())

    if not multi_user_found and combined.get("ADMIN_USERNAME"):
        users[0] = AdminUser(
            username=combined["ADMIN_USERNAME"],
            password=combined.get("ADMIN_PASSWORD"),
        )

    return EnvSettings(
        users=users,
        SMTP_HOST=combined.get("SMTP_HOST"),
        SMTP_PORT=combined.get("SMTP_PORT"),
        SMTP_USER=combined.get("SMTP_USER"),
        SMTP_PASS=combined.get("SMTP_PASS"),
        SMTP_RECIPIENTS=combined.get("SMTP_RECIPIENTS"),
        SMTP_SECURE=combined.get("SMTP_SECURE"),
    )


def get_admin_settings_for_form(path: Optional[str] = None) -> AdminSettingsForm:
    """Settings as shown in the admin form. Passwords are never returned."""
    settings = get_env_settings(path)
    return AdminSettingsForm(
        users=[AdminUser(username=user.username) for user in settings.users[:MAX_ADMIN_USERS]],
        smtp=SmtpFormSettings(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            recipients=settings.SMTP_RECIPIENTS,
            secure=settings.SMTP_SECURE == "true",
        ),
    )


def _is_secret(key: str) -> bool:
    return key.endswith(SECRET_KEYS_SUFFIXES)


def save_env_settings(values: Mapping[str, Optional[str]], path: Optional[str] = None) -> ActionResult:
    """
    Merge ``values`` into the settings file and rewrite it.

    Empty secrets mean "keep the current value". Other empty values
    are written as empty strings.
    """
    env_path = _env_path(path)
    current = read_env_file(str(env_path))

    for key, value in values.items():
        if value is None or (value == "" and _is_secret(key)):
            continue
        current[key] = str(value)

    lines = [f"{key}={value}" for key, value in current.items()]
    try:
        env_path.parent.mkdir(parents=True, exist_ok=True)
        env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError:
        logger.exception("Error writing settings file %s", env_path)
        keys_attempted = ", ".join(values.keys())
        return ActionResult(
            success=False,
            error=f"No se pudieron guardar las configuraciones ({keys_attempted}).",
        )

    logger.info("Saved %d settings to %s", len(values), env_path)
    return ActionResult(success=True)
