from pydantic import BaseModel, condecimal
from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal


# ---------- Daily Menu ----------
class DailyMenuItemRead(BaseModel):
    id: str
    product_id: str
    display_order: int
    custom_price: Optional[Decimal] = None

    class Config:
        from_attributes = True


class DailyMenuRead(BaseModel):
    id: str
    date: date
    is_published: bool
    show_prices: bool
    items: List[DailyMenuItemRead] = []

    class Config:
        from_attributes = True


class SaveMenuCommand(BaseModel):
    """Full selection for one day, replacing whatever was saved before."""
    selected_product_ids: List[str] = []
    order_by_product_id: Dict[str, int] = {}
    custom_price_by_product_id: Dict[str, Optional[condecimal(ge=0, decimal_places=2)]] = {}
    show_prices: Optional[bool] = None


class PublishToggle(BaseModel):
    publish: bool


class ShowPricesToggle(BaseModel):
    show: bool


class DuplicateRequest(BaseModel):
    source_date: Optional[date] = None  # defaults to the day before the target
    confirm_overwrite: bool = False


class DuplicateOutcome(BaseModel):
    state: str
    needs_confirmation: bool = False
    items_copied: int = 0
    source_date: date
    target_date: date


class DashboardStats(BaseModel):
    total_products: int = 0
    active_products: int = 0
    today_item_count: int = 0
    today_published: bool = False
    has_menu: bool = False
