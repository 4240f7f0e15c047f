from pydantic import BaseModel, Field
from typing import Optional, Literal
from decimal import Decimal

PriceUnit = Literal["FIXED", "PER_PERSON"]


# ---------- Category ----------
class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)


class CategoryRead(BaseModel):
    id: str
    name: str
    display_order: int

    class Config:
        from_attributes = True


# ---------- Product ----------
class ProductBase(BaseModel):
    name: str
    category_id: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)  # None = price on request
    price_unit: PriceUnit = "FIXED"


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    category_id: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    price_unit: Optional[PriceUnit] = None


class ProductActiveToggle(BaseModel):
    is_active: bool


class ProductRead(ProductBase):
    id: str
    is_active: bool

    class Config:
        from_attributes = True


class ProductWithCategory(BaseModel):
    product: ProductRead
    category: Optional[CategoryRead] = None
