from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from menudujour.auth.dependencies import get_current_user
from menudujour.crud import catalog as crud_catalog
from menudujour.db import get_db
from menudujour.models.user import User
from menudujour.schemas.catalog import (
    CategoryCreate,
    CategoryRead,
    ProductActiveToggle,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    ProductWithCategory,
)
from menudujour.utils.responses import raise_for_result
from menudujour.utils.tenant import get_current_restaurant_id

router = APIRouter()


# ----- Categories
@router.get("/categories", response_model=List[CategoryRead])
async def list_categories(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_catalog.list_categories(db, get_current_restaurant_id(user)))


@router.post("/categories", response_model=CategoryRead, status_code=201)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_catalog.add_category(db, get_current_restaurant_id(user), payload.name))


# ----- Products
@router.get("/products", response_model=List[ProductWithCategory])
async def list_products(
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = raise_for_result(
        await crud_catalog.get_products_with_categories(db, get_current_restaurant_id(user), include_inactive)
    )
    return [
        ProductWithCategory(
            product=ProductRead.model_validate(product),
            category=CategoryRead.model_validate(category) if category else None,
        )
        for product, category in data["products"]
    ]


@router.post("/products", response_model=ProductRead, status_code=201)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_catalog.add_product(db, get_current_restaurant_id(user), payload))


@router.put("/products/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(
        await crud_catalog.update_product(db, get_current_restaurant_id(user), product_id, payload)
    )


@router.post("/products/{product_id}/active", response_model=ProductRead)
async def set_product_active(
    product_id: str,
    payload: ProductActiveToggle,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(
        await crud_catalog.toggle_product_active(db, get_current_restaurant_id(user), product_id, payload.is_active)
    )


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    deleted_id = raise_for_result(await crud_catalog.delete_product(db, get_current_restaurant_id(user), product_id))
    return {"deleted": deleted_id}
