from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, DateTime, Date, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from menudujour.models.base import Base
import uuid


class DailyMenu(Base):
    __tablename__ = "daily_menus"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    restaurant = relationship("Restaurant", back_populates="daily_menus")

    date = Column(Date, nullable=False)
    is_published = Column(Boolean, nullable=False, default=False)
    show_prices = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    items = relationship(
        "DailyMenuItem",
        back_populates="daily_menu",
        cascade="all, delete-orphan",
        order_by="DailyMenuItem.display_order",
    )

    __table_args__ = (
        UniqueConstraint("restaurant_id", "date", name="uq_daily_menus_restaurant_date"),
    )


class DailyMenuItem(Base):
    __tablename__ = "daily_menu_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    daily_menu_id = Column(String, ForeignKey("daily_menus.id", ondelete="CASCADE"), nullable=False, index=True)
    daily_menu = relationship("DailyMenu", back_populates="items")

    product_id = Column(String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    product = relationship("Product", back_populates="menu_items")

    display_order = Column(Integer, nullable=False, default=0)  # scoped to the product's category
    custom_price = Column(Numeric(10, 2), nullable=True)  # day-only override of Product.price
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("daily_menu_id", "product_id", name="uq_daily_menu_items_menu_product"),
    )
