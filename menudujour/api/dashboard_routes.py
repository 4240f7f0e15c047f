from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from menudujour.auth.dependencies import get_current_user
from menudujour.crud.daily_menu import compute_dashboard_stats
from menudujour.db import get_db
from menudujour.models.user import User
from menudujour.schemas.daily_menu import DashboardStats
from menudujour.utils.responses import raise_for_result
from menudujour.utils.tenant import get_current_restaurant_id

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return raise_for_result(await compute_dashboard_stats(db, get_current_restaurant_id(user)))
