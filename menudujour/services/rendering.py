"""
Menu Rendering Engine

Pure transformation from (design bundle, categories, dated selection) to the
ordered, grouped and priced view consumed by both the screen page and the
PDF export. No I/O happens here: callers load rows, this module decides

- which section every item lands in (beverage lead-in, named category, "Autres"),
- the order of sections and of items inside a section,
- which prices are printed and how they are formatted,
- the boilerplate text of the header and footer.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from menudujour.core.constants import (
    CATEGORY_TITLES,
    DESIGN_DEFAULTS,
    PRICE_UNIT_FIXED,
    UNCATEGORIZED_TITLE,
)
from menudujour.utils.dates import format_menu_date, format_short_date

TWO_PLACES = Decimal("0.01")
DEFAULT_BEVERAGE_NAMES = ("boisson", "boissons")


# ---------- Input contract ----------

@dataclass(frozen=True)
class DesignConfig:
    """Restaurant boilerplate with every absent field replaced by its fallback."""
    opening_days: str
    opening_days_2: str
    lunch_hours: str
    dinner_hours: str
    holiday_notice: str
    meat_origin: str
    payment_notice: str
    subtitle: str
    restaurant_type: str
    cities: str
    sides_note: str

    @classmethod
    def resolve(cls, source=None) -> "DesignConfig":
        """Build from a Restaurant row, a dict, or nothing at all."""
        values = {}
        for name, fallback in DESIGN_DEFAULTS.items():
            if isinstance(source, dict):
                value = source.get(name)
            else:
                value = getattr(source, name, None)
            values[name] = value if value is not None and value.strip() else fallback
        return cls(**values)

    @property
    def service_hours(self) -> str:
        return "   ".join(h for h in (self.lunch_hours, self.dinner_hours) if h)


@dataclass(frozen=True)
class RenderCategory:
    id: str
    name: str
    display_order: int


@dataclass(frozen=True)
class RenderItem:
    product_name: str
    effective_price: Optional[Decimal]
    category_id: Optional[str]
    display_order: int = 0
    description: Optional[str] = None
    price_unit: str = PRICE_UNIT_FIXED


# ---------- Output contract ----------

@dataclass(frozen=True)
class RenderedItem:
    name: str
    description: Optional[str]
    price: Optional[str]  # None → no price cell at all
    price_unit: str

    @property
    def text(self) -> str:
        return f"{self.name} — {self.price}" if self.price is not None else self.name


@dataclass(frozen=True)
class MenuGroup:
    title: str
    items: List[RenderedItem]


@dataclass(frozen=True)
class MenuView:
    restaurant_name: str
    menu_date: date
    date_label: str
    short_date_label: str
    design: DesignConfig
    show_prices: bool
    beverages: List[RenderedItem] = field(default_factory=list)
    groups: List[MenuGroup] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.beverages and not self.groups

    @property
    def title(self) -> str:
        return f"Menu du jour - {self.restaurant_name} - {self.date_label}"

    def lines(self) -> List[str]:
        """Flat text rendition, in display order; handy for comparing adapters."""
        out = [item.text for item in self.beverages]
        for group in self.groups:
            out.append(group.title)
            out.extend(item.text for item in group.items)
        return out


# ---------- Rules ----------

def effective_price(custom_price: Optional[Decimal], base_price: Optional[Decimal]) -> Optional[Decimal]:
    return custom_price if custom_price is not None else base_price


def format_price(amount: Decimal) -> str:
    # PER_PERSON is a label, never a multiplier: both units print the same amount
    return str(Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def category_title(name: str) -> str:
    return CATEGORY_TITLES.get(name, name)


def _render_item(item: RenderItem, show_prices: bool) -> RenderedItem:
    price = None
    if show_prices and item.effective_price is not None:
        price = format_price(item.effective_price)
    return RenderedItem(
        name=item.product_name,
        description=item.description,
        price=price,
        price_unit=item.price_unit,
    )


def _ordered(items: Iterable[RenderItem]) -> List[RenderItem]:
    # sorted() is stable: equal display_order keeps input order
    return sorted(items, key=lambda i: i.display_order)


def build_menu_view(
    restaurant_name: str,
    menu_date: date,
    categories: Sequence[RenderCategory],
    items: Sequence[RenderItem],
    design: Optional[DesignConfig] = None,
    show_prices: bool = True,
    page_show_prices: bool = True,
    beverage_names: Iterable[str] = DEFAULT_BEVERAGE_NAMES,
) -> MenuView:
    """
    Group and order a day's items for display.

    Named categories come in ascending display_order (ties keep the order of
    ``categories``); categories matching ``beverage_names`` case-insensitively
    are lifted into ``beverages``; items with no category, or whose category
    is not in ``categories``, trail under "Autres", after the items of any
    category itself named "Autres".
    """
    prices_visible = show_prices and page_show_prices
    beverage_keys = {name.strip().lower() for name in beverage_names}

    ordered_categories = sorted(categories, key=lambda c: c.display_order)
    known_ids = {c.id for c in ordered_categories}

    by_category: Dict[str, List[RenderItem]] = {}
    uncategorized: List[RenderItem] = []
    for item in items:
        if item.category_id is not None and item.category_id in known_ids:
            by_category.setdefault(item.category_id, []).append(item)
        else:
            uncategorized.append(item)

    beverages: List[RenderedItem] = []
    groups: List[MenuGroup] = []
    for category in ordered_categories:
        members = by_category.get(category.id)
        if not members:
            continue
        rendered = [_render_item(i, prices_visible) for i in _ordered(members)]
        if category.name.strip().lower() in beverage_keys:
            beverages.extend(rendered)
        else:
            groups.append(MenuGroup(title=category_title(category.name), items=rendered))

    if uncategorized:
        trailing = [_render_item(i, prices_visible) for i in _ordered(uncategorized)]
        # A user category titled "Autres" absorbs the bucket and moves last
        same_title = [g for g in groups if g.title == UNCATEGORIZED_TITLE]
        groups = [g for g in groups if g.title != UNCATEGORIZED_TITLE]
        merged = [item for g in same_title for item in g.items]
        groups.append(MenuGroup(title=UNCATEGORIZED_TITLE, items=merged + trailing))

    return MenuView(
        restaurant_name=restaurant_name,
        menu_date=menu_date,
        date_label=format_menu_date(menu_date),
        short_date_label=format_short_date(menu_date),
        design=design or DesignConfig.resolve(),
        show_prices=prices_visible,
        beverages=beverages,
        groups=groups,
    )


def view_from_menu(restaurant, menu, categories, page_show_prices: bool = True, beverage_names=DEFAULT_BEVERAGE_NAMES) -> MenuView:
    """Adapt ORM rows (restaurant, DailyMenu with items+products, categories)."""
    render_categories = [RenderCategory(c.id, c.name, c.display_order) for c in categories]
    render_items = []
    for menu_item in menu.items:
        product = menu_item.product
        if product is None:
            continue
        render_items.append(RenderItem(
            product_name=product.name,
            description=product.description,
            effective_price=effective_price(menu_item.custom_price, product.price),
            price_unit=product.price_unit or PRICE_UNIT_FIXED,
            category_id=product.category_id,
            display_order=menu_item.display_order or 0,
        ))

    return build_menu_view(
        restaurant_name=restaurant.name,
        menu_date=menu.date,
        categories=render_categories,
        items=render_items,
        design=DesignConfig.resolve(restaurant),
        show_prices=bool(menu.show_prices),
        page_show_prices=page_show_prices,
        beverage_names=beverage_names,
    )
