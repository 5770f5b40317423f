"""
Product model for database.
"""
from sqlalchemy import Boolean, Column, Integer, Numeric, Text
from repufrenos.database import Base


class Product(Base):
    """Product database model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    brand = Column(Text, nullable=False)
    model = Column(Text, nullable=False)
    compatibility = Column(Text, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    category = Column(Text, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    image_url = Column(Text, nullable=True)
    is_on_sale = Column(Boolean, default=False)
    sale_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
