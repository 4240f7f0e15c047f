import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from menudujour.core.results import ErrorKind, Result
from menudujour.models.menu import DailyMenu, DailyMenuItem, Product
from menudujour.schemas.daily_menu import DashboardStats, SaveMenuCommand
from menudujour.utils.dates import today_local

log = logging.getLogger(__name__)

# (product_id, display_order, custom_price)
ItemRow = Tuple[str, int, Optional[Decimal]]


# --- Helpers ---------------------------------------------------------------

async def find_menu(
    db: AsyncSession,
    restaurant_id: int,
    menu_date: date,
    for_update: bool = False,
) -> Optional[DailyMenu]:
    query = select(DailyMenu).where(
        DailyMenu.restaurant_id == restaurant_id,
        DailyMenu.date == menu_date,
    )
    if for_update:
        # Serializes concurrent full replaces of the same day
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def load_menu(
    db: AsyncSession,
    restaurant_id: int,
    menu_date: date,
    published_only: bool = False,
    with_products: bool = False,
) -> Optional[DailyMenu]:
    """Menu with its items (ordered by display_order), optionally with products."""
    items_loader = selectinload(DailyMenu.items)
    if with_products:
        items_loader = items_loader.selectinload(DailyMenuItem.product)

    query = (
        select(DailyMenu)
        .where(DailyMenu.restaurant_id == restaurant_id, DailyMenu.date == menu_date)
        .options(items_loader)
        .execution_options(populate_existing=True)
    )
    if published_only:
        query = query.where(DailyMenu.is_published.is_(True))

    result = await db.execute(query)
    return result.scalar_one_or_none()


async def replace_items(db: AsyncSession, menu: DailyMenu, rows: Iterable[ItemRow]) -> int:
    """Delete every item of ``menu`` then insert ``rows``. Does not commit."""
    await db.execute(delete(DailyMenuItem).where(DailyMenuItem.daily_menu_id == menu.id))
    db.expire(menu, ["items"])

    new_items = [
        DailyMenuItem(
            daily_menu_id=menu.id,
            product_id=product_id,
            display_order=display_order,
            custom_price=custom_price,
        )
        for product_id, display_order, custom_price in rows
    ]
    db.add_all(new_items)
    await db.flush()
    return len(new_items)


async def _unknown_products(db: AsyncSession, restaurant_id: int, product_ids: List[str]) -> set:
    if not product_ids:
        return set()
    result = await db.execute(
        select(Product.id).where(Product.restaurant_id == restaurant_id, Product.id.in_(product_ids))
    )
    return set(product_ids) - set(result.scalars().all())


# --- Reads -----------------------------------------------------------------

async def get_menu(db: AsyncSession, restaurant_id: Optional[int], menu_date: date) -> Result[Optional[DailyMenu]]:
    """``Result.success(None)`` when no menu exists for that day."""
    if restaurant_id is None:
        return Result.unauthenticated()

    try:
        menu = await load_menu(db, restaurant_id, menu_date)
    except SQLAlchemyError:
        log.exception("Menu fetch failed for restaurant %s on %s", restaurant_id, menu_date)
        return Result.store_error()
    return Result.success(menu)


async def compute_dashboard_stats(
    db: AsyncSession,
    restaurant_id: Optional[int],
    today: Optional[date] = None,
) -> Result[DashboardStats]:
    if restaurant_id is None:
        return Result.unauthenticated()

    today = today or today_local()
    try:
        total = await db.execute(
            select(func.count(Product.id)).where(Product.restaurant_id == restaurant_id)
        )
        active = await db.execute(
            select(func.count(Product.id)).where(
                Product.restaurant_id == restaurant_id,
                Product.is_active.is_(True),
            )
        )
        stats = DashboardStats(total_products=total.scalar() or 0, active_products=active.scalar() or 0)

        menu = await find_menu(db, restaurant_id, today)
        if menu:
            count = await db.execute(
                select(func.count(DailyMenuItem.id)).where(DailyMenuItem.daily_menu_id == menu.id)
            )
            stats.has_menu = True
            stats.today_published = bool(menu.is_published)
            stats.today_item_count = count.scalar() or 0
    except SQLAlchemyError:
        log.exception("Dashboard stats failed for restaurant %s", restaurant_id)
        return Result.store_error()
    return Result.success(stats)


# --- Writes ----------------------------------------------------------------

async def save_menu(
    db: AsyncSession,
    restaurant_id: Optional[int],
    menu_date: date,
    command: SaveMenuCommand,
) -> Result[DailyMenu]:
    """
    Idempotent full replace of the selection for ``menu_date``.

    Menu creation, item deletion and item insertion share one transaction:
    either the whole new selection is stored or nothing changes.
    """
    if restaurant_id is None:
        return Result.unauthenticated()

    # A set semantically; keep first-seen order for stable inserts
    selected = list(dict.fromkeys(command.selected_product_ids))
    rows = [
        (
            product_id,
            command.order_by_product_id.get(product_id, 0),
            command.custom_price_by_product_id.get(product_id),
        )
        for product_id in selected
    ]

    for attempt in range(2):
        try:
            unknown = await _unknown_products(db, restaurant_id, selected)
            if unknown:
                return Result.fail(ErrorKind.VALIDATION, "Unknown product(s) in selection")

            menu = await find_menu(db, restaurant_id, menu_date, for_update=True)
            if menu is None:
                menu = DailyMenu(
                    restaurant_id=restaurant_id,
                    date=menu_date,
                    is_published=False,
                    show_prices=True if command.show_prices is None else command.show_prices,
                )
                db.add(menu)
                await db.flush()
            elif command.show_prices is not None:
                menu.show_prices = command.show_prices

            await replace_items(db, menu, rows)
            await db.commit()
            break
        except IntegrityError:
            # Another session created the same (restaurant, date) first: retry against it
            await db.rollback()
            if attempt:
                log.exception("Menu save kept conflicting for restaurant %s on %s", restaurant_id, menu_date)
                return Result.store_error()
            log.warning("Concurrent menu creation for restaurant %s on %s, retrying", restaurant_id, menu_date)
        except SQLAlchemyError:
            await db.rollback()
            log.exception("Menu save failed for restaurant %s on %s", restaurant_id, menu_date)
            return Result.store_error()

    log.info("Saved menu for restaurant %s on %s (%d items)", restaurant_id, menu_date, len(rows))
    return await get_menu(db, restaurant_id, menu_date)


async def _update_menu_flag(
    db: AsyncSession,
    restaurant_id: Optional[int],
    menu_date: date,
    **values,
) -> Result[int]:
    # Zero matching rows (no menu that day) is still a success
    if restaurant_id is None:
        return Result.unauthenticated()

    try:
        result = await db.execute(
            update(DailyMenu)
            .where(DailyMenu.restaurant_id == restaurant_id, DailyMenu.date == menu_date)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Menu update %s failed for restaurant %s on %s", values, restaurant_id, menu_date)
        return Result.store_error()
    return Result.success(result.rowcount)


async def set_published(db: AsyncSession, restaurant_id: Optional[int], menu_date: date, publish: bool) -> Result[int]:
    return await _update_menu_flag(db, restaurant_id, menu_date, is_published=publish)


async def set_show_prices(db: AsyncSession, restaurant_id: Optional[int], menu_date: date, show: bool) -> Result[int]:
    return await _update_menu_flag(db, restaurant_id, menu_date, show_prices=show)
