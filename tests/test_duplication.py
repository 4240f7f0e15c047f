from datetime import date
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from menudujour.core.results import ErrorKind
from menudujour.crud import daily_menu as crud_menu
from menudujour.schemas.daily_menu import SaveMenuCommand
from menudujour.services.duplication import SOURCE_EMPTY, DuplicationState, MenuDuplicator

SOURCE = date(2024, 1, 14)
TARGET = date(2024, 1, 15)


def _snapshot(menu):
    return [(i.id, i.product_id, i.display_order, i.custom_price) for i in menu.items]


async def _seed_source(db, fx, menu_date=SOURCE):
    soupe, steak = fx.product_ids["Soupe"], fx.product_ids["Steak"]
    await crud_menu.save_menu(
        db,
        fx.restaurant_id,
        menu_date,
        SaveMenuCommand(
            selected_product_ids=[soupe, steak],
            order_by_product_id={soupe: 0, steak: 1},
            custom_price_by_product_id={steak: Decimal("16.00")},
        ),
    )
    return soupe, steak


async def test_apply_into_empty_target(db, chez_marcel):
    soupe, steak = await _seed_source(db, chez_marcel)
    duplicator = MenuDuplicator(db, chez_marcel.restaurant_id)

    result = await duplicator.duplicate(SOURCE, TARGET)

    assert result.ok
    assert result.data.items_copied == 2
    assert result.data.needs_confirmation is False
    assert duplicator.state == DuplicationState.APPLIED

    target = (await crud_menu.get_menu(db, chez_marcel.restaurant_id, TARGET)).data
    assert sorted((i.product_id, i.display_order, i.custom_price) for i in target.items) == sorted([
        (soupe, 0, None),
        (steak, 1, Decimal("16.00")),
    ])


async def test_new_target_is_an_unpublished_draft(db, chez_marcel):
    rid = chez_marcel.restaurant_id
    await _seed_source(db, chez_marcel)
    await crud_menu.set_published(db, rid, SOURCE, True)

    await MenuDuplicator(db, rid).duplicate(SOURCE, TARGET)

    target = (await crud_menu.get_menu(db, rid, TARGET)).data
    assert target.is_published is False
    assert target.show_prices is True


async def test_confirmation_gate_leaves_target_untouched(db, chez_marcel):
    rid = chez_marcel.restaurant_id
    await _seed_source(db, chez_marcel)
    steak = chez_marcel.product_ids["Steak"]
    await crud_menu.save_menu(db, rid, TARGET, SaveMenuCommand(selected_product_ids=[steak], order_by_product_id={steak: 5}))
    before = _snapshot((await crud_menu.get_menu(db, rid, TARGET)).data)

    duplicator = MenuDuplicator(db, rid)
    result = await duplicator.duplicate(SOURCE, TARGET, confirm_overwrite=False)

    assert result.ok
    assert result.data.needs_confirmation is True
    assert result.data.items_copied == 0
    assert duplicator.state == DuplicationState.NEEDS_CONFIRMATION
    after = _snapshot((await crud_menu.get_menu(db, rid, TARGET)).data)
    assert after == before


async def test_confirmed_overwrite_replaces_items_and_keeps_flags(db, chez_marcel):
    rid = chez_marcel.restaurant_id
    soupe, steak = await _seed_source(db, chez_marcel)
    await crud_menu.save_menu(db, rid, TARGET, SaveMenuCommand(selected_product_ids=[steak], show_prices=False))
    await crud_menu.set_published(db, rid, TARGET, True)

    result = await MenuDuplicator(db, rid).duplicate(SOURCE, TARGET, confirm_overwrite=True)

    assert result.data.items_copied == 2
    target = (await crud_menu.get_menu(db, rid, TARGET)).data
    assert sorted(i.product_id for i in target.items) == sorted([soupe, steak])
    assert target.is_published is True
    assert target.show_prices is False


async def test_existing_but_empty_target_needs_no_confirmation(db, chez_marcel):
    rid = chez_marcel.restaurant_id
    await _seed_source(db, chez_marcel)
    await crud_menu.save_menu(db, rid, TARGET, SaveMenuCommand())

    result = await MenuDuplicator(db, rid).duplicate(SOURCE, TARGET)

    assert result.data.needs_confirmation is False
    assert result.data.items_copied == 2


async def test_missing_source_fails(db, chez_marcel):
    duplicator = MenuDuplicator(db, chez_marcel.restaurant_id)

    result = await duplicator.duplicate(SOURCE, TARGET)

    assert result.kind == ErrorKind.NOT_FOUND
    assert result.error == SOURCE_EMPTY
    assert duplicator.state == DuplicationState.FAILED
    assert (await crud_menu.get_menu(db, chez_marcel.restaurant_id, TARGET)).data is None


async def test_source_with_no_items_fails(db, chez_marcel):
    rid = chez_marcel.restaurant_id
    await crud_menu.save_menu(db, rid, SOURCE, SaveMenuCommand())

    result = await MenuDuplicator(db, rid).duplicate(SOURCE, TARGET)

    assert result.error == SOURCE_EMPTY


async def test_same_source_and_target_is_rejected(db, chez_marcel):
    await _seed_source(db, chez_marcel)
    result = await MenuDuplicator(db, chez_marcel.restaurant_id).duplicate(SOURCE, SOURCE)
    assert result.kind == ErrorKind.VALIDATION


async def test_previous_day_is_relative_to_viewed_date(db, chez_marcel):
    rid = chez_marcel.restaurant_id
    viewed = date(2024, 3, 1)
    await _seed_source(db, chez_marcel, menu_date=date(2024, 2, 29))

    result = await MenuDuplicator(db, rid).duplicate_from_previous_day(viewed)

    assert result.data.source_date == date(2024, 2, 29)
    assert result.data.target_date == viewed
    assert result.data.items_copied == 2


async def test_unauthenticated(db):
    duplicator = MenuDuplicator(db, None)
    result = await duplicator.duplicate(SOURCE, TARGET)
    assert result.kind == ErrorKind.UNAUTHENTICATED
    assert duplicator.state == DuplicationState.FAILED


async def test_fresh_duplicator_is_idle(db, chez_marcel):
    assert MenuDuplicator(db, chez_marcel.restaurant_id).state == DuplicationState.IDLE


def _conflicting_flush(db, monkeypatch, conflicts=1):
    """Make the first ``conflicts`` flushes fail as if another session created the row."""
    real_flush = db.flush
    calls = {"n": 0}

    async def flush(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] <= conflicts:
            raise IntegrityError("INSERT INTO daily_menus", {}, Exception("UNIQUE constraint failed"))
        return await real_flush(*args, **kwargs)

    monkeypatch.setattr(db, "flush", flush)


async def test_target_created_concurrently_is_retried_once(db, chez_marcel, monkeypatch):
    rid = chez_marcel.restaurant_id
    await _seed_source(db, chez_marcel)
    _conflicting_flush(db, monkeypatch)

    duplicator = MenuDuplicator(db, rid)
    result = await duplicator.duplicate(SOURCE, TARGET)

    assert result.ok
    assert result.data.items_copied == 2
    assert duplicator.state == DuplicationState.APPLIED
    assert len((await crud_menu.get_menu(db, rid, TARGET)).data.items) == 2


async def test_repeated_conflict_is_a_store_error(db, chez_marcel, monkeypatch):
    rid = chez_marcel.restaurant_id
    await _seed_source(db, chez_marcel)
    _conflicting_flush(db, monkeypatch, conflicts=2)

    duplicator = MenuDuplicator(db, rid)
    result = await duplicator.duplicate(SOURCE, TARGET)

    assert result.kind == ErrorKind.STORE
    assert duplicator.state == DuplicationState.FAILED
    assert (await crud_menu.get_menu(db, rid, TARGET)).data is None
