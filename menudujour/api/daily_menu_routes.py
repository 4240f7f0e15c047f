from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from menudujour.auth.dependencies import get_current_user
from menudujour.crud import daily_menu as crud_menu
from menudujour.db import get_db
from menudujour.models.user import User
from menudujour.schemas.daily_menu import (
    DailyMenuRead,
    DuplicateOutcome,
    DuplicateRequest,
    PublishToggle,
    SaveMenuCommand,
    ShowPricesToggle,
)
from menudujour.services.duplication import MenuDuplicator
from menudujour.services.public_menu import INVALID_DATE
from menudujour.utils.dates import parse_iso_date
from menudujour.utils.responses import raise_for_result
from menudujour.utils.tenant import get_current_restaurant_id

router = APIRouter()


def menu_date_param(menu_date: str) -> date:
    parsed = parse_iso_date(menu_date)
    if parsed is None:
        raise HTTPException(status_code=400, detail=INVALID_DATE)
    return parsed


@router.get("/{menu_date}", response_model=Optional[DailyMenuRead])
async def get_daily_menu(
    menu_date: date = Depends(menu_date_param),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    # null body = no menu saved for that day yet
    return raise_for_result(await crud_menu.get_menu(db, get_current_restaurant_id(user), menu_date))


@router.put("/{menu_date}", response_model=DailyMenuRead)
async def save_daily_menu(
    command: SaveMenuCommand,
    menu_date: date = Depends(menu_date_param),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await crud_menu.save_menu(db, get_current_restaurant_id(user), menu_date, command))


@router.post("/{menu_date}/publish")
async def publish_daily_menu(
    payload: PublishToggle,
    menu_date: date = Depends(menu_date_param),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    updated = raise_for_result(
        await crud_menu.set_published(db, get_current_restaurant_id(user), menu_date, payload.publish)
    )
    return {"updated": updated, "is_published": payload.publish}


@router.post("/{menu_date}/show-prices")
async def show_prices_daily_menu(
    payload: ShowPricesToggle,
    menu_date: date = Depends(menu_date_param),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    updated = raise_for_result(
        await crud_menu.set_show_prices(db, get_current_restaurant_id(user), menu_date, payload.show)
    )
    return {"updated": updated, "show_prices": payload.show}


@router.post("/{menu_date}/duplicate", response_model=DuplicateOutcome)
async def duplicate_daily_menu(
    payload: DuplicateRequest,
    menu_date: date = Depends(menu_date_param),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Copy a day's selection into ``menu_date``.

    Without ``source_date`` the day before ``menu_date`` is used. A target
    that already has items comes back with ``needs_confirmation: true`` and
    is left untouched until the call is repeated with ``confirm_overwrite``.
    """
    duplicator = MenuDuplicator(db, get_current_restaurant_id(user))
    if payload.source_date is None:
        result = await duplicator.duplicate_from_previous_day(menu_date, payload.confirm_overwrite)
    else:
        result = await duplicator.duplicate(payload.source_date, menu_date, payload.confirm_overwrite)
    return raise_for_result(result)
