import re
from datetime import date, datetime, timezone

import pytest

from menudujour.utils.dates import (
    format_menu_date,
    format_short_date,
    navigate_date,
    parse_iso_date,
    previous_day,
    relative_date_label,
    today_local,
)
from menudujour.utils.slugs import generate_slug, slugify


# ---------- Dates ----------

def test_format_menu_date():
    assert format_menu_date(date(2024, 1, 15)) == "lundi 15 janvier 2024"
    assert format_menu_date(date(2024, 8, 4)) == "dimanche 4 août 2024"


def test_format_short_date():
    assert format_short_date(date(2024, 1, 15)) == "15-janv.-24"
    assert format_short_date(date(2031, 12, 1)) == "1-déc.-31"


def test_date_formatting_is_deterministic():
    d = date(2025, 2, 28)
    assert format_menu_date(d) == format_menu_date(date(2025, 2, 28))
    assert format_short_date(d) == format_short_date(date(2025, 2, 28))


@pytest.mark.parametrize("value", ["2024-01-15", "2024-02-29"])
def test_parse_iso_date_accepts_valid(value):
    assert parse_iso_date(value) == date.fromisoformat(value)


@pytest.mark.parametrize("value", ["", "15/01/2024", "2024-1-15", "2024-01-15T10:00", "2023-02-29", "2024-13-01", "abcd-ef-gh"])
def test_parse_iso_date_rejects_malformed(value):
    assert parse_iso_date(value) is None


def test_navigate_and_previous_day():
    assert navigate_date(date(2024, 1, 31), 1) == date(2024, 2, 1)
    assert previous_day(date(2024, 3, 1)) == date(2024, 2, 29)


def test_today_local_uses_configured_timezone():
    # 23:30 UTC on Jan 14 is already Jan 15 in Paris
    now = datetime(2024, 1, 14, 23, 30, tzinfo=timezone.utc)
    assert today_local(now) == date(2024, 1, 15)


def test_relative_date_label():
    today = date(2024, 1, 15)
    assert relative_date_label(today, today) == "Aujourd'hui"
    assert relative_date_label(date(2024, 1, 16), today) == "Demain"
    assert relative_date_label(date(2024, 1, 14), today) == "Hier"
    assert relative_date_label(date(2024, 1, 18), today) == "Dans 3 jours"
    assert relative_date_label(date(2024, 1, 10), today) == "Il y a 5 jours"


# ---------- Slugs ----------

def test_slugify_folds_accents_and_punctuation():
    assert slugify("Chez Marcel") == "chez-marcel"
    assert slugify("  Crêperie L'Été !! ") == "creperie-l-ete"


def test_generate_slug_shape():
    slug = generate_slug("Chez Marcel")
    assert re.fullmatch(r"chez-marcel-[a-z0-9]{6}", slug)


def test_generate_slug_without_usable_characters():
    assert re.fullmatch(r"restaurant-[a-z0-9]{6}", generate_slug("???"))


def test_same_name_never_collides():
    slugs = {generate_slug("Chez Marcel") for _ in range(50)}
    assert len(slugs) == 50
