from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from menudujour.models.base import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    logo_url = Column(String, nullable=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    # PDF / screen design bundle (NULL → hardcoded fallback at render time)
    opening_days = Column(String, nullable=True)
    opening_days_2 = Column(String, nullable=True)
    lunch_hours = Column(String, nullable=True)
    dinner_hours = Column(String, nullable=True)
    holiday_notice = Column(Text, nullable=True)
    meat_origin = Column(Text, nullable=True)
    payment_notice = Column(Text, nullable=True)
    subtitle = Column(String, nullable=True)
    restaurant_type = Column(String, nullable=True)
    cities = Column(String, nullable=True)
    sides_note = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Back-populated relationships
    users = relationship("User", back_populates="restaurant")
    categories = relationship("Category", back_populates="restaurant", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="restaurant", cascade="all, delete-orphan")
    daily_menus = relationship("DailyMenu", back_populates="restaurant", cascade="all, delete-orphan")
    invites = relationship("Invite", back_populates="restaurant", cascade="all, delete-orphan")
