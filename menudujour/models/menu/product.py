from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, DateTime, Numeric, Text
from sqlalchemy.orm import relationship
from menudujour.models.base import Base
import uuid


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    restaurant = relationship("Restaurant", back_populates="products")

    # Nullable: uncategorized products render under "Autres"
    category_id = Column(String, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    category = relationship("Category", back_populates="products")

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)  # NULL = price on request
    price_unit = Column(String, nullable=False, default="FIXED")  # "FIXED", "PER_PERSON"
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    menu_items = relationship("DailyMenuItem", back_populates="product", cascade="all, delete-orphan")
