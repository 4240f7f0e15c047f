import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from menudujour.core.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_RESTAURANT_NAME,
    ROLE_ADMIN,
    ROLE_OWNER,
    SEED_PRODUCTS,
)
from menudujour.core.results import ErrorKind, Result
from menudujour.models.menu import Category, Product
from menudujour.models.restaurant import Restaurant
from menudujour.models.user import User
from menudujour.schemas.restaurant import RestaurantDesignUpdate
from menudujour.utils.slugs import generate_slug

log = logging.getLogger(__name__)

SLUG_ATTEMPTS = 5


async def get_restaurant(db: AsyncSession, restaurant_id: Optional[int]) -> Result[Restaurant]:
    if restaurant_id is None:
        return Result.unauthenticated()
    try:
        restaurant = await db.get(Restaurant, restaurant_id)
    except SQLAlchemyError:
        log.exception("Restaurant fetch failed for %s", restaurant_id)
        return Result.store_error()
    if not restaurant:
        return Result.fail(ErrorKind.NOT_FOUND, "Restaurant not found")
    return Result.success(restaurant)


async def get_restaurant_by_slug(db: AsyncSession, slug: str) -> Result[Restaurant]:
    try:
        result = await db.execute(select(Restaurant).where(Restaurant.slug == slug))
        restaurant = result.scalar_one_or_none()
    except SQLAlchemyError:
        log.exception("Restaurant lookup failed for slug %s", slug)
        return Result.store_error()
    if not restaurant:
        return Result.fail(ErrorKind.NOT_FOUND, "Restaurant not found")
    return Result.success(restaurant)


async def _unique_slug(db: AsyncSession, name: str) -> str:
    for _ in range(SLUG_ATTEMPTS):
        slug = generate_slug(name)
        result = await db.execute(select(Restaurant.id).where(Restaurant.slug == slug))
        if result.scalar_one_or_none() is None:
            return slug
    raise RuntimeError(f"Could not generate a free slug for {name!r}")


async def _seed_catalog(db: AsyncSession, restaurant_id: int) -> int:
    """Seed the default taxonomy (when missing) and the starter products. Does not commit."""
    result = await db.execute(select(Category).where(Category.restaurant_id == restaurant_id))
    categories = {c.name: c for c in result.scalars().all()}

    if not categories:
        for name, display_order in DEFAULT_CATEGORIES:
            category = Category(restaurant_id=restaurant_id, name=name, display_order=display_order)
            db.add(category)
            categories[name] = category
        await db.flush()

    for category_name, name, price, price_unit in SEED_PRODUCTS:
        category = categories.get(category_name)
        db.add(Product(
            restaurant_id=restaurant_id,
            category_id=category.id if category else None,
            name=name,
            price=price,
            price_unit=price_unit,
            is_active=True,
        ))
    await db.flush()
    return len(SEED_PRODUCTS)


async def initialize_restaurant(
    db: AsyncSession,
    user: Optional[User],
    name: str = DEFAULT_RESTAURANT_NAME,
) -> Result[Restaurant]:
    """
    Create the caller's restaurant, make them its owner and seed the catalog.

    A user already linked to a restaurant without products only gets the
    catalog re-seeded; one with products is rejected.
    """
    if user is None:
        return Result.unauthenticated()

    name = (name or "").strip() or DEFAULT_RESTAURANT_NAME

    try:
        if user.restaurant_id:
            result = await db.execute(
                select(func.count(Product.id)).where(Product.restaurant_id == user.restaurant_id)
            )
            if result.scalar():
                return Result.fail(ErrorKind.VALIDATION, "Restaurant already initialized")

            await _seed_catalog(db, user.restaurant_id)
            await db.commit()
            restaurant = await db.get(Restaurant, user.restaurant_id)
            log.info("Re-seeded catalog for restaurant %s", user.restaurant_id)
            return Result.success(restaurant)

        restaurant = Restaurant(name=name, slug=await _unique_slug(db, name))
        db.add(restaurant)
        await db.flush()

        user.restaurant_id = restaurant.id
        user.role = ROLE_OWNER
        await _seed_catalog(db, restaurant.id)
        await db.commit()
        await db.refresh(restaurant)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Restaurant initialization failed for user %s", user.id)
        return Result.store_error()

    log.info("🏢 Created restaurant %s (%s)", restaurant.name, restaurant.slug)
    return Result.success(restaurant)


async def update_restaurant_design(
    db: AsyncSession,
    user: Optional[User],
    updates: RestaurantDesignUpdate,
) -> Result[Restaurant]:
    """Owner/admin only. Blank design strings are stored as NULL (→ fallback text)."""
    if user is None or user.restaurant_id is None:
        return Result.unauthenticated()
    if user.role not in (ROLE_OWNER, ROLE_ADMIN):
        return Result.unauthorized()

    update_data = updates.model_dump(exclude_unset=True)
    if "name" in update_data and not (update_data["name"] or "").strip():
        return Result.fail(ErrorKind.VALIDATION, "Restaurant name is required")

    try:
        restaurant = await db.get(Restaurant, user.restaurant_id)
        if not restaurant:
            return Result.fail(ErrorKind.NOT_FOUND, "Restaurant not found")

        for key, value in update_data.items():
            if isinstance(value, str):
                value = value.strip() or None
            setattr(restaurant, key, value)

        await db.commit()
        await db.refresh(restaurant)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Design update failed for restaurant %s", user.restaurant_id)
        return Result.store_error()
    return Result.success(restaurant)
