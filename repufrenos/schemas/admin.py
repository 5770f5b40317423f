"""
Pydantic schemas for admin authentication and settings.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class AdminUser(BaseModel):
    """One admin user slot."""
    username: Optional[str] = None
    password: Optional[str] = None


class EnvSettings(BaseModel):
    """Runtime settings merged from the settings file and the environment."""
    users: List[AdminUser]
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: Optional[str] = None
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_RECIPIENTS: Optional[str] = None
    SMTP_SECURE: Optional[str] = None

    @property
    def smtp_configured(self) -> bool:
        return all([self.SMTP_HOST, self.SMTP_PORT, self.SMTP_USER, self.SMTP_PASS, self.SMTP_RECIPIENTS])


class SmtpFormSettings(BaseModel):
    host: Optional[str] = None
    port: Optional[str] = None
    user: Optional[str] = None
    recipients: Optional[str] = None
    secure: bool = False


class AdminSettingsForm(BaseModel):
    """Settings as shown in the admin panel. No passwords."""
    users: List[AdminUser]
    smtp: SmtpFormSettings


class EnvSettingsUpdate(BaseModel):
    """Admin panel submission for the settings file."""
    users: List[AdminUser] = Field(default_factory=list, max_length=3)
    smtp_host: Optional[str] = None
    smtp_port: Optional[str] = None
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    smtp_recipients: Optional[str] = None
    smtp_secure: Optional[bool] = None

    def to_env(self) -> Dict[str, Optional[str]]:
        values: Dict[str, Optional[str]] = {}
        for index, user in enumerate(self.users, start=1):
            if user.username is not None:
                values[f"ADMIN_USER_{index}_USERNAME"] = user.username
            if user.password is not None:
                values[f"ADMIN_USER_{index}_PASSWORD"] = user.password
        values["SMTP_HOST"] = self.smtp_host
        values["SMTP_PORT"] = self.smtp_port
        values["SMTP_USER"] = self.smtp_user
        values["SMTP_PASS"] = self.smtp_pass
        values["SMTP_RECIPIENTS"] = self.smtp_recipients
        if self.smtp_secure is not None:
            values["SMTP_SECURE"] = "true" if self.smtp_secure else "false"
        return values


class ContactInfo(BaseModel):
    """WhatsApp contact shown on the storefront."""
    name: str
    number: str


class AppearanceSettings(BaseModel):
    home_image_url: Optional[str] = None
    category_images: Dict[str, str] = Field(default_factory=dict)


class LoginRequest(BaseModel):
    """Schema for login request."""
    username: str
    password: str


class Token(BaseModel):
    """Schema for authentication token."""
    access_token: str
    token_type: str
