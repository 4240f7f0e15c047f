import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from menudujour.core.constants import PRICE_UNIT_FIXED
from menudujour.core.results import ErrorKind, Result
from menudujour.models.menu import Category, Product
from menudujour.schemas.catalog import ProductCreate, ProductUpdate

log = logging.getLogger(__name__)


# --- Reads -----------------------------------------------------------------

async def list_categories(db: AsyncSession, restaurant_id: Optional[int]) -> Result[List[Category]]:
    """Categories of a restaurant, ascending display_order (ties: creation order)."""
    if restaurant_id is None:
        return Result.unauthenticated()

    try:
        result = await db.execute(
            select(Category)
            .where(Category.restaurant_id == restaurant_id)
            .order_by(Category.display_order, Category.created_at)
        )
    except SQLAlchemyError:
        log.exception("Categories fetch failed for restaurant %s", restaurant_id)
        return Result.store_error()
    return Result.success(list(result.scalars().all()))


async def list_products(
    db: AsyncSession,
    restaurant_id: Optional[int],
    include_inactive: bool = False,
) -> Result[List[Product]]:
    if restaurant_id is None:
        return Result.unauthenticated()

    query = select(Product).where(Product.restaurant_id == restaurant_id)
    if not include_inactive:
        query = query.where(Product.is_active.is_(True))

    try:
        result = await db.execute(query.order_by(Product.name))
    except SQLAlchemyError:
        log.exception("Products fetch failed for restaurant %s", restaurant_id)
        return Result.store_error()
    return Result.success(list(result.scalars().all()))


def join_with_category(
    products: Sequence[Product],
    categories: Sequence[Category],
) -> List[Tuple[Product, Optional[Category]]]:
    # category_id pointing outside the supplied set is treated as uncategorized
    by_id = {c.id: c for c in categories}
    return [(p, by_id.get(p.category_id) if p.category_id else None) for p in products]


async def get_products_with_categories(
    db: AsyncSession,
    restaurant_id: Optional[int],
    include_inactive: bool = False,
) -> Result[dict]:
    categories = await list_categories(db, restaurant_id)
    if not categories.ok:
        return Result.fail(categories.kind, categories.error)

    products = await list_products(db, restaurant_id, include_inactive)
    if not products.ok:
        return Result.fail(products.kind, products.error)

    return Result.success({
        "categories": categories.data,
        "products": join_with_category(products.data, categories.data),
    })


async def _get_owned_product(db: AsyncSession, restaurant_id: int, product_id: str) -> Optional[Product]:
    result = await db.execute(
        select(Product).where(Product.id == product_id, Product.restaurant_id == restaurant_id)
    )
    return result.scalar_one_or_none()


async def _category_belongs(db: AsyncSession, restaurant_id: int, category_id: str) -> bool:
    result = await db.execute(
        select(Category.id).where(Category.id == category_id, Category.restaurant_id == restaurant_id)
    )
    return result.scalar_one_or_none() is not None


# --- Writes ----------------------------------------------------------------

async def add_category(db: AsyncSession, restaurant_id: Optional[int], name: str) -> Result[Category]:
    """Append a category after the existing ones."""
    if restaurant_id is None:
        return Result.unauthenticated()
    if not name or not name.strip():
        return Result.fail(ErrorKind.VALIDATION, "Category name is required")

    try:
        result = await db.execute(
            select(func.max(Category.display_order)).where(Category.restaurant_id == restaurant_id)
        )
        last_order = result.scalar()
        category = Category(
            restaurant_id=restaurant_id,
            name=name.strip(),
            display_order=(last_order + 1) if last_order is not None else 0,
        )
        db.add(category)
        await db.commit()
        await db.refresh(category)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Add category failed for restaurant %s", restaurant_id)
        return Result.store_error()
    return Result.success(category)


async def add_product(db: AsyncSession, restaurant_id: Optional[int], data: ProductCreate) -> Result[Product]:
    if restaurant_id is None:
        return Result.unauthenticated()
    if not data.name or not data.name.strip():
        return Result.fail(ErrorKind.VALIDATION, "Product name is required")

    try:
        if data.category_id and not await _category_belongs(db, restaurant_id, data.category_id):
            return Result.fail(ErrorKind.NOT_FOUND, "Category not found")

        product = Product(
            restaurant_id=restaurant_id,
            category_id=data.category_id,
            name=data.name.strip(),
            description=data.description,
            price=data.price,
            price_unit=data.price_unit or PRICE_UNIT_FIXED,
            is_active=True,
        )
        db.add(product)
        await db.commit()
        await db.refresh(product)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Add product failed for restaurant %s", restaurant_id)
        return Result.store_error()
    return Result.success(product)


async def update_product(
    db: AsyncSession,
    restaurant_id: Optional[int],
    product_id: str,
    updates: ProductUpdate,
) -> Result[Product]:
    """Partial update; only fields explicitly sent are touched."""
    if restaurant_id is None:
        return Result.unauthenticated()

    update_data = updates.model_dump(exclude_unset=True)
    if "name" in update_data:
        if not update_data["name"] or not update_data["name"].strip():
            return Result.fail(ErrorKind.VALIDATION, "Product name is required")
        update_data["name"] = update_data["name"].strip()
    if "price_unit" in update_data and update_data["price_unit"] is None:
        return Result.fail(ErrorKind.VALIDATION, "Price unit is required")

    try:
        product = await _get_owned_product(db, restaurant_id, product_id)
        if not product:
            return Result.fail(ErrorKind.NOT_FOUND, "Product not found")

        category_id = update_data.get("category_id")
        if category_id and not await _category_belongs(db, restaurant_id, category_id):
            return Result.fail(ErrorKind.NOT_FOUND, "Category not found")

        for key, value in update_data.items():
            setattr(product, key, value)

        await db.commit()
        await db.refresh(product)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Update product %s failed", product_id)
        return Result.store_error()
    return Result.success(product)


async def toggle_product_active(
    db: AsyncSession,
    restaurant_id: Optional[int],
    product_id: str,
    is_active: bool,
) -> Result[Product]:
    if restaurant_id is None:
        return Result.unauthenticated()

    try:
        product = await _get_owned_product(db, restaurant_id, product_id)
        if not product:
            return Result.fail(ErrorKind.NOT_FOUND, "Product not found")

        product.is_active = is_active
        await db.commit()
        await db.refresh(product)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Toggle product %s failed", product_id)
        return Result.store_error()
    return Result.success(product)


async def delete_product(db: AsyncSession, restaurant_id: Optional[int], product_id: str) -> Result[str]:
    """Hard delete. The product must belong to the caller's restaurant."""
    if restaurant_id is None:
        return Result.unauthenticated()

    try:
        product = await _get_owned_product(db, restaurant_id, product_id)
        if not product:
            return Result.fail(ErrorKind.NOT_FOUND, "Product not found")

        await db.delete(product)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Delete product %s failed", product_id)
        return Result.store_error()
    return Result.success(product_id)
