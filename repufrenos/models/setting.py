"""
Key-value setting model for database.
"""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func
from repufrenos.database import Base


class Setting(Base):
    """Admin panel setting stored as a key and a text value."""

    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
