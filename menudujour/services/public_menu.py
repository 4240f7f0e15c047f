"""
Public / preview menu resolution.

An explicit date means authoring preview: the menu is shown whether or not it
is published. No date means the public page for today, and only a published
menu is ever shown.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from menudujour.core.config import get_settings
from menudujour.core.results import ErrorKind, Result
from menudujour.crud.daily_menu import load_menu
from menudujour.crud.restaurant import get_restaurant_by_slug
from menudujour.models.menu import Category
from menudujour.models.restaurant import Restaurant
from menudujour.services.rendering import MenuView, view_from_menu
from menudujour.utils.dates import format_menu_date, parse_iso_date, today_local

log = logging.getLogger(__name__)

INVALID_DATE = "Invalid date format. Use YYYY-MM-DD"


@dataclass
class PublicMenu:
    restaurant: Restaurant
    menu_date: date
    preview: bool  # True when showing a menu that is not published
    view: Optional[MenuView] = None

    @property
    def date_label(self) -> str:
        return format_menu_date(self.menu_date)

    @property
    def has_items(self) -> bool:
        return self.view is not None and not self.view.is_empty


def resolve_date(date_param: Optional[str]) -> Result[date]:
    if date_param is None or date_param == "":
        return Result.success(today_local())
    parsed = parse_iso_date(date_param)
    if parsed is None:
        return Result.fail(ErrorKind.VALIDATION, INVALID_DATE)
    return Result.success(parsed)


async def load_public_menu(
    db: AsyncSession,
    slug: str,
    date_param: Optional[str] = None,
    page_show_prices: bool = True,
) -> Result[PublicMenu]:
    """
    Restaurant by slug + the menu visible for the request.

    VALIDATION for a malformed date (checked before any store access),
    NOT_FOUND for an unknown slug; a missing menu is a success with
    ``view=None``.
    """
    menu_date = resolve_date(date_param)
    if not menu_date.ok:
        return Result.fail(menu_date.kind, menu_date.error)

    restaurant = await get_restaurant_by_slug(db, slug)
    if not restaurant.ok:
        return Result.fail(restaurant.kind, restaurant.error)

    published_only = not date_param
    try:
        menu = await load_menu(
            db,
            restaurant.data.id,
            menu_date.data,
            published_only=published_only,
            with_products=True,
        )
        categories = []
        if menu is not None:
            result = await db.execute(
                select(Category)
                .where(Category.restaurant_id == restaurant.data.id)
                .order_by(Category.display_order, Category.created_at)
            )
            categories = result.scalars().all()
    except SQLAlchemyError:
        log.exception("Public menu load failed for %s on %s", slug, menu_date.data)
        return Result.store_error()

    public = PublicMenu(restaurant=restaurant.data, menu_date=menu_date.data, preview=False)
    if menu is not None:
        public.preview = not menu.is_published
        public.view = view_from_menu(
            restaurant.data,
            menu,
            categories,
            page_show_prices=page_show_prices,
            beverage_names=get_settings().beverage_category_names,
        )
    return Result.success(public)
