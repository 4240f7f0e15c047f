from datetime import datetime

from sqlalchemy import Column, String, Integer, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from menudujour.models.base import Base
import secrets
import uuid


class Invite(Base):
    __tablename__ = "invites"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String, unique=True, nullable=False, default=lambda: secrets.token_urlsafe(24))
    role = Column(String, nullable=False)  # "owner", "staff"
    email = Column(String, nullable=True)

    created_by = Column(String, ForeignKey("users.id"), nullable=True)
    used_by = Column(String, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=True)
    used_at = Column(DateTime, nullable=True)

    restaurant = relationship("Restaurant", back_populates="invites")
