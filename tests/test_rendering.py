from datetime import date
from decimal import Decimal

from menudujour.core.constants import DESIGN_DEFAULTS
from menudujour.services.rendering import (
    DesignConfig,
    RenderCategory,
    RenderItem,
    build_menu_view,
    category_title,
    effective_price,
    format_price,
)

MENU_DATE = date(2024, 1, 15)

ENTREE = RenderCategory("c-entree", "Entrée", 0)
PLAT = RenderCategory("c-plat", "Plat", 1)
DESSERT = RenderCategory("c-dessert", "Dessert", 2)
BOISSON = RenderCategory("c-boisson", "Boisson", 5)


def _item(name, category_id, price="10.00", order=0, **kwargs):
    return RenderItem(
        product_name=name,
        effective_price=Decimal(price) if price is not None else None,
        category_id=category_id,
        display_order=order,
        **kwargs,
    )


def _titles(view):
    return [g.title for g in view.groups]


def test_chez_marcel_scenario():
    view = build_menu_view(
        "Chez Marcel",
        MENU_DATE,
        [ENTREE, PLAT],
        [_item("Soupe", "c-entree", "6.00"), _item("Steak", "c-plat", "18.50")],
        show_prices=True,
    )

    assert [(g.title, [i.text for i in g.items]) for g in view.groups] == [
        ("Entrées", ["Soupe — 6.00"]),
        ("Plats", ["Steak — 18.50"]),
    ]
    assert view.title == "Menu du jour - Chez Marcel - lundi 15 janvier 2024"


def test_groups_follow_category_display_order_not_input_order():
    view = build_menu_view(
        "R",
        MENU_DATE,
        [DESSERT, PLAT, ENTREE],
        [_item("Tarte", "c-dessert"), _item("Steak", "c-plat"), _item("Soupe", "c-entree")],
    )
    assert _titles(view) == ["Entrées", "Plats", "Desserts"]


def test_category_ties_keep_input_order():
    first = RenderCategory("a", "Spécialités", 1)
    second = RenderCategory("b", "Suggestions", 1)
    view = build_menu_view("R", MENU_DATE, [first, second], [_item("X", "b"), _item("Y", "a")])
    assert _titles(view) == ["Spécialités", "Suggestions"]


def test_items_sorted_by_display_order_within_category():
    view = build_menu_view(
        "R",
        MENU_DATE,
        [PLAT],
        [
            _item("Troisième", "c-plat", order=2),
            _item("Premier", "c-plat", order=0),
            _item("Second", "c-plat", order=1),
            _item("Premier bis", "c-plat", order=0),
        ],
    )
    assert [i.name for i in view.groups[0].items] == ["Premier", "Premier bis", "Second", "Troisième"]


def test_uncategorized_items_trail_under_autres():
    view = build_menu_view(
        "R",
        MENU_DATE,
        [ENTREE, PLAT],
        [
            _item("Mystère", None, order=0),
            _item("Soupe", "c-entree"),
            _item("Steak", "c-plat"),
        ],
    )
    assert _titles(view) == ["Entrées", "Plats", "Autres"]
    assert [i.name for i in view.groups[-1].items] == ["Mystère"]
    for group in view.groups[:-1]:
        assert "Mystère" not in [i.name for i in group.items]


def test_unknown_category_id_is_treated_as_uncategorized():
    view = build_menu_view("R", MENU_DATE, [ENTREE], [_item("Orphelin", "c-deleted"), _item("Soupe", "c-entree")])
    assert _titles(view) == ["Entrées", "Autres"]
    assert view.groups[1].items[0].name == "Orphelin"


def test_category_named_autres_shares_the_uncategorized_group():
    autres = RenderCategory("c-autres", "Autres", 0)
    view = build_menu_view(
        "R",
        MENU_DATE,
        [autres, PLAT],
        [_item("Sans catégorie", None), _item("Fromage", "c-autres"), _item("Steak", "c-plat")],
    )
    assert _titles(view) == ["Plats", "Autres"]
    assert [i.name for i in view.groups[-1].items] == ["Fromage", "Sans catégorie"]


def test_autres_absent_when_everything_is_categorized():
    view = build_menu_view("R", MENU_DATE, [ENTREE], [_item("Soupe", "c-entree")])
    assert "Autres" not in _titles(view)


def test_empty_categories_are_skipped():
    view = build_menu_view("R", MENU_DATE, [ENTREE, PLAT, DESSERT], [_item("Steak", "c-plat")])
    assert _titles(view) == ["Plats"]


def test_beverages_lead_in_and_are_not_a_group():
    view = build_menu_view(
        "R",
        MENU_DATE,
        [ENTREE, BOISSON],
        [_item("Soupe", "c-entree"), _item("Champagne", "c-boisson", "16.00")],
    )
    assert [i.name for i in view.beverages] == ["Champagne"]
    assert _titles(view) == ["Entrées"]
    assert view.lines()[0] == "Champagne — 16.00"


def test_beverage_match_is_case_insensitive_and_configurable():
    drinks = RenderCategory("d", "BOISSONS", 0)
    wine = RenderCategory("w", "Vins", 1)
    view = build_menu_view(
        "R",
        MENU_DATE,
        [drinks, wine],
        [_item("Eau", "d"), _item("Bordeaux", "w")],
        beverage_names=["boissons", "vins"],
    )
    assert [i.name for i in view.beverages] == ["Eau", "Bordeaux"]
    assert view.groups == []


def test_custom_price_overrides_base_price():
    assert effective_price(Decimal("4.50"), Decimal("6.00")) == Decimal("4.50")
    assert effective_price(None, Decimal("6.00")) == Decimal("6.00")
    assert effective_price(Decimal("0"), Decimal("6.00")) == Decimal("0")
    assert effective_price(None, None) is None


def test_show_prices_false_hides_every_price():
    view = build_menu_view(
        "R",
        MENU_DATE,
        [ENTREE, PLAT, BOISSON],
        [_item("Soupe", "c-entree"), _item("Steak", "c-plat"), _item("Eau", "c-boisson"), _item("X", None)],
        show_prices=False,
    )
    rendered = view.beverages + [i for g in view.groups for i in g.items]
    assert rendered
    assert all(i.price is None for i in rendered)
    assert view.show_prices is False


def test_page_override_is_anded_with_menu_flag():
    items = [_item("Soupe", "c-entree")]
    hidden = build_menu_view("R", MENU_DATE, [ENTREE], items, show_prices=True, page_show_prices=False)
    assert hidden.groups[0].items[0].price is None

    shown = build_menu_view("R", MENU_DATE, [ENTREE], items, show_prices=True, page_show_prices=True)
    assert shown.groups[0].items[0].price == "10.00"


def test_null_price_suppresses_price_cell_even_when_prices_shown():
    view = build_menu_view("R", MENU_DATE, [PLAT], [_item("Sur demande", "c-plat", None)], show_prices=True)
    item = view.groups[0].items[0]
    assert item.price is None
    assert item.text == "Sur demande"


def test_per_person_renders_like_fixed():
    view = build_menu_view(
        "R",
        MENU_DATE,
        [PLAT],
        [
            _item("Côte 2-3P", "c-plat", "180", order=0, price_unit="PER_PERSON"),
            _item("Steak", "c-plat", "180", order=1, price_unit="FIXED"),
        ],
    )
    per_person, fixed = view.groups[0].items
    assert per_person.price == fixed.price == "180.00"
    assert per_person.price_unit == "PER_PERSON"


def test_format_price_two_decimals():
    assert format_price(Decimal("6")) == "6.00"
    assert format_price(Decimal("18.5")) == "18.50"
    assert format_price(Decimal("2.345")) == "2.35"


def test_category_titles():
    assert category_title("Entrée") == "Entrées"
    assert category_title("Fromage") == "Fromages"
    assert category_title("Spécialités du chef") == "Spécialités du chef"


def test_design_config_falls_back_for_missing_or_blank_fields():
    design = DesignConfig.resolve({"lunch_hours": "11h30-14h", "subtitle": "   ", "cities": None})
    assert design.lunch_hours == "11h30-14h"
    assert design.subtitle == DESIGN_DEFAULTS["subtitle"]
    assert design.cities == DESIGN_DEFAULTS["cities"]
    assert design.service_hours == f"11h30-14h   {DESIGN_DEFAULTS['dinner_hours']}"

    assert DesignConfig.resolve() == DesignConfig.resolve({})


def test_empty_selection_gives_empty_view():
    view = build_menu_view("R", MENU_DATE, [ENTREE], [])
    assert view.is_empty
    assert view.lines() == []


def test_same_input_same_output():
    args = ("R", MENU_DATE, [ENTREE, PLAT], [_item("Soupe", "c-entree"), _item("X", None)])
    assert build_menu_view(*args) == build_menu_view(*args)
