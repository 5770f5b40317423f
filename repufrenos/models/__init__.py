"""
SQLAlchemy database models.
"""
from repufrenos.models.product import Product
from repufrenos.models.setting import Setting

__all__ = ["Product", "Setting"]
