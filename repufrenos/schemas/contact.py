"""
Pydantic schemas for contact forms.
"""
from pydantic import BaseModel, EmailStr, Field


class ContactForm(BaseModel):
    """Contact page submission."""
    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ChatInquiry(BaseModel):
    """Live chat widget submission."""
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)
