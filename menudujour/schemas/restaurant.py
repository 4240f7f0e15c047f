from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional
from datetime import datetime


class RestaurantInitialize(BaseModel):
    name: str = Field("Mon Restaurant", min_length=1)


class RestaurantDesignUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    logo_url: Optional[str] = None
    opening_days: Optional[str] = None
    opening_days_2: Optional[str] = None
    lunch_hours: Optional[str] = None
    dinner_hours: Optional[str] = None
    holiday_notice: Optional[str] = None
    meat_origin: Optional[str] = None
    payment_notice: Optional[str] = None
    subtitle: Optional[str] = None
    restaurant_type: Optional[str] = None
    cities: Optional[str] = None
    sides_note: Optional[str] = None


class RestaurantRead(BaseModel):
    id: int
    name: str
    slug: str
    logo_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    opening_days: Optional[str] = None
    opening_days_2: Optional[str] = None
    lunch_hours: Optional[str] = None
    dinner_hours: Optional[str] = None
    holiday_notice: Optional[str] = None
    meat_origin: Optional[str] = None
    payment_notice: Optional[str] = None
    subtitle: Optional[str] = None
    restaurant_type: Optional[str] = None
    cities: Optional[str] = None
    sides_note: Optional[str] = None

    class Config:
        from_attributes = True


# ---------- Invites ----------
class InviteCreate(BaseModel):
    role: Literal["owner", "staff"] = "staff"
    email: Optional[EmailStr] = None
    expires_at: Optional[datetime] = None


class InviteRead(BaseModel):
    token: str
    role: str
    email: Optional[str] = None
    expires_at: Optional[datetime] = None

    class Config:
        from_attributes = True
