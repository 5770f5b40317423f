"""
Shared schema pieces.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Base for payloads exchanged in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ActionResult(BaseModel):
    """Outcome of a server action. Failures carry a user-facing message."""
    success: bool
    error: Optional[str] = None
    url: Optional[str] = None


class Message(BaseModel):
    """Plain confirmation message."""
    title: str
    description: Optional[str] = None
