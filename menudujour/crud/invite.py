import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from menudujour.core.constants import ROLE_ADMIN, ROLE_OWNER
from menudujour.core.results import ErrorKind, Result
from menudujour.models.invite import Invite
from menudujour.models.user import User
from menudujour.schemas.restaurant import InviteCreate

log = logging.getLogger(__name__)


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Columns are naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


async def create_invite(db: AsyncSession, user: Optional[User], invite: InviteCreate) -> Result[Invite]:
    """Single-use invitation to the caller's restaurant (owner/admin only)."""
    if user is None:
        return Result.unauthenticated()
    if user.restaurant_id is None:
        return Result.fail(ErrorKind.NOT_FOUND, "Restaurant not found")
    if user.role not in (ROLE_OWNER, ROLE_ADMIN):
        return Result.unauthorized()

    new_invite = Invite(
        restaurant_id=user.restaurant_id,
        role=invite.role,
        email=invite.email,
        expires_at=_naive_utc(invite.expires_at),
        created_by=user.id,
    )
    try:
        db.add(new_invite)
        await db.commit()
        await db.refresh(new_invite)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Invite creation failed for restaurant %s", user.restaurant_id)
        return Result.store_error()
    return Result.success(new_invite)


async def accept_invite(
    db: AsyncSession,
    user: Optional[User],
    token: str,
    now: Optional[datetime] = None,
) -> Result[Invite]:
    if user is None:
        return Result.unauthenticated()

    now = _naive_utc(now) or datetime.utcnow()
    try:
        result = await db.execute(select(Invite).where(Invite.token == token).with_for_update())
        invite = result.scalar_one_or_none()
        if not invite:
            return Result.fail(ErrorKind.NOT_FOUND, "Invite not found")
        if invite.used_at is not None:
            return Result.fail(ErrorKind.VALIDATION, "Invite already used")
        if invite.expires_at is not None and invite.expires_at < now:
            return Result.fail(ErrorKind.VALIDATION, "Invite expired")

        invite.used_at = now
        invite.used_by = user.id
        user.restaurant_id = invite.restaurant_id
        user.role = invite.role
        await db.commit()
        await db.refresh(invite)
    except SQLAlchemyError:
        await db.rollback()
        log.exception("Invite acceptance failed for user %s", user.id)
        return Result.store_error()
    return Result.success(invite)
