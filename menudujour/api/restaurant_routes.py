from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from menudujour.auth.dependencies import get_current_user
from menudujour.crud import invite as crud_invite
from menudujour.crud import restaurant as crud_restaurant
from menudujour.db import get_db
from menudujour.models.user import User
from menudujour.schemas.restaurant import (
    InviteCreate,
    InviteRead,
    RestaurantDesignUpdate,
    RestaurantInitialize,
    RestaurantRead,
)
from menudujour.utils.responses import raise_for_result
from menudujour.utils.tenant import get_current_restaurant_id

router = APIRouter()


# 🏢 Restaurant
@router.post("/restaurant/initialize", response_model=RestaurantRead, status_code=201)
async def initialize_restaurant(
    payload: RestaurantInitialize,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_restaurant.initialize_restaurant(db, user, payload.name))


@router.get("/restaurant", response_model=RestaurantRead)
async def get_restaurant(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_restaurant.get_restaurant(db, get_current_restaurant_id(user)))


@router.put("/restaurant/design", response_model=RestaurantRead)
async def update_design(
    payload: RestaurantDesignUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_restaurant.update_restaurant_design(db, user, payload))


# ✉️ Invites
@router.post("/restaurant/invites", response_model=InviteRead, status_code=201)
async def create_invite(
    payload: InviteCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_invite.create_invite(db, user, payload))


@router.post("/invites/{token}/accept", response_model=InviteRead)
async def accept_invite(
    token: str,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_invite.accept_invite(db, user, token))
