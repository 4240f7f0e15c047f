"""
Menu Duplication Service

Copies the selection of a source day into a target day:
- an empty source fails with "source empty"
- a target that already has items is only overwritten with an explicit confirmation
- product references, per-category order and custom prices are carried over
- the target keeps its own is_published / show_prices flags
"""
import logging
from datetime import date
from enum import Enum
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from menudujour.core.results import ErrorKind, Result
from menudujour.crud.daily_menu import find_menu, load_menu, replace_items
from menudujour.models.menu import DailyMenu
from menudujour.schemas.daily_menu import DuplicateOutcome
from menudujour.utils.dates import previous_day

log = logging.getLogger(__name__)

SOURCE_EMPTY = "Source menu is empty"


class DuplicationState(str, Enum):
    IDLE = "idle"
    REQUESTED = "requested"
    NEEDS_CONFIRMATION = "needs_confirmation"
    APPLIED = "applied"
    FAILED = "failed"


class MenuDuplicator:
    """Duplicates one restaurant's daily selection between dates."""

    def __init__(self, db: AsyncSession, restaurant_id: Optional[int]):
        self.db = db
        self.restaurant_id = restaurant_id
        self.state = DuplicationState.IDLE

    async def duplicate(
        self,
        source_date: date,
        target_date: date,
        confirm_overwrite: bool = False,
    ) -> Result[DuplicateOutcome]:
        """
        Copy ``source_date``'s items into ``target_date``.

        Returns an outcome with ``needs_confirmation=True`` (and nothing
        written) when the target already holds items and
        ``confirm_overwrite`` is False; the caller re-invokes with
        ``confirm_overwrite=True`` to proceed.
        """
        if self.restaurant_id is None:
            self.state = DuplicationState.FAILED
            return Result.unauthenticated()
        if source_date == target_date:
            self.state = DuplicationState.FAILED
            return Result.fail(ErrorKind.VALIDATION, "Source and target dates are identical")

        self.state = DuplicationState.REQUESTED
        for attempt in range(2):
            try:
                source = await load_menu(self.db, self.restaurant_id, source_date)
                if source is None or not source.items:
                    self.state = DuplicationState.FAILED
                    return Result.fail(ErrorKind.NOT_FOUND, SOURCE_EMPTY)
                rows = [(i.product_id, i.display_order, i.custom_price) for i in source.items]

                target = await find_menu(self.db, self.restaurant_id, target_date, for_update=True)
                if target is not None and not confirm_overwrite:
                    existing = await load_menu(self.db, self.restaurant_id, target_date)
                    if existing is not None and existing.items:
                        # Nothing written: end the transaction to release the row lock
                        await self.db.commit()
                        self.state = DuplicationState.NEEDS_CONFIRMATION
                        return Result.success(self._outcome(source_date, target_date, needs_confirmation=True))

                if target is None:
                    target = DailyMenu(
                        restaurant_id=self.restaurant_id,
                        date=target_date,
                        is_published=False,
                        show_prices=True,
                    )
                    self.db.add(target)
                    await self.db.flush()

                copied = await replace_items(self.db, target, rows)
                await self.db.commit()
                break
            except IntegrityError:
                # Another session created the target day first: retry against its row
                await self.db.rollback()
                if attempt:
                    self.state = DuplicationState.FAILED
                    log.exception(
                        "Menu duplication %s → %s kept conflicting for restaurant %s",
                        source_date, target_date, self.restaurant_id,
                    )
                    return Result.store_error()
                log.warning(
                    "Concurrent creation of %s for restaurant %s, retrying duplication",
                    target_date, self.restaurant_id,
                )
            except SQLAlchemyError:
                await self.db.rollback()
                self.state = DuplicationState.FAILED
                log.exception(
                    "Menu duplication %s → %s failed for restaurant %s",
                    source_date, target_date, self.restaurant_id,
                )
                return Result.store_error()

        self.state = DuplicationState.APPLIED
        log.info(
            "Duplicated %d items %s → %s for restaurant %s",
            copied, source_date, target_date, self.restaurant_id,
        )
        return Result.success(self._outcome(source_date, target_date, items_copied=copied))

    async def duplicate_from_previous_day(self, target_date: date, confirm_overwrite: bool = False):
        """Source is the day before the *viewed* date, not before the real today."""
        return await self.duplicate(previous_day(target_date), target_date, confirm_overwrite)

    def _outcome(self, source_date: date, target_date: date, needs_confirmation: bool = False, items_copied: int = 0):
        return DuplicateOutcome(
            state=self.state.value,
            needs_confirmation=needs_confirmation,
            items_copied=items_copied,
            source_date=source_date,
            target_date=target_date,
        )
