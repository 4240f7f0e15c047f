from decimal import Decimal

# 📋 Category taxonomy seeded for every new restaurant (name, display_order)
DEFAULT_CATEGORIES = [
    ("Boisson", 0),
    ("Entrée", 1),
    ("Plat", 2),
    ("Fromage", 3),
    ("Dessert", 4),
]

# Singular taxonomy names → displayed section titles
CATEGORY_TITLES = {
    "Entrée": "Entrées",
    "Plat": "Plats",
    "Fromage": "Fromages",
    "Dessert": "Desserts",
    "Boisson": "Boissons",
}

UNCATEGORIZED_TITLE = "Autres"

PRICE_UNIT_FIXED = "FIXED"
PRICE_UNIT_PER_PERSON = "PER_PERSON"

ROLE_OWNER = "owner"
ROLE_STAFF = "staff"
ROLE_ADMIN = "admin"

DEFAULT_RESTAURANT_NAME = "Mon Restaurant"

# 🖨️ Boilerplate used whenever a restaurant has not filled a design field
DESIGN_DEFAULTS = {
    "opening_days": "du lundi au vendredi",
    "opening_days_2": "Service compris 15%",
    "lunch_hours": "12h-14h",
    "dinner_hours": "19h30-21h30",
    "holiday_notice": "",
    "meat_origin": "Le bœuf est d'origine allemande ou française le veau est hollandais.",
    "payment_notice": (
        "Devant la recrudescence des chèques impayés, nous vous prions de régler "
        "par Carte Bleue, espèces ou tickets restaurant "
        "(article 40 décret 92-456 du 22/05/92)"
    ),
    "subtitle": "RESTAURANT",
    "restaurant_type": "- BOUCHER -",
    "cities": "PARIS • TOKYO",
    "sides_note": "* Accompagnements au choix",
}


# 🌱 Starter catalog (category name, product name, price, unit)
SEED_PRODUCTS = [
    ("Boisson", "Coupe de champagne A Heucq (12cl)", Decimal("16.00"), PRICE_UNIT_FIXED),
    ("Entrée", "Boudin noir de Ch Parra, salade verte", Decimal("14.00"), PRICE_UNIT_FIXED),
    ("Entrée", "Rosette de Vic", Decimal("14.00"), PRICE_UNIT_FIXED),
    ("Entrée", "Cecina de bœuf séché", Decimal("20.00"), PRICE_UNIT_FIXED),
    ("Entrée", "Pied de porc désossé, salade verte", Decimal("14.00"), PRICE_UNIT_FIXED),
    ("Entrée", "Poireaux vinaigrette", Decimal("14.00"), PRICE_UNIT_FIXED),
    ("Plat", "Steak haché (250 grs), frites ou haricots verts", Decimal("19.50"), PRICE_UNIT_FIXED),
    ("Plat", "Steak tartare (250 grs), frites ou haricots verts", Decimal("28.00"), PRICE_UNIT_FIXED),
    ("Plat", "Faux-Filet noire de la Baltique, frites", Decimal("52.00"), PRICE_UNIT_FIXED),
    ("Plat", "Pavé de rumsteak sauce au poivre, frites", Decimal("40.00"), PRICE_UNIT_FIXED),
    ("Plat", "L Bone, frites", Decimal("160.00"), PRICE_UNIT_FIXED),
    ("Plat", "Filet de bœuf sauce au poivre, frites", Decimal("65.00"), PRICE_UNIT_FIXED),
    ("Plat", "Côte de bœuf bio domaine Coiffard 2-3P, frites", Decimal("180.00"), PRICE_UNIT_PER_PERSON),
    ("Plat", "Côte de bœuf bio domaine Coiffard 3+, frites", Decimal("220.00"), PRICE_UNIT_PER_PERSON),
    ("Plat", "Tataki de bœuf anchois et comté, frites", Decimal("32.00"), PRICE_UNIT_FIXED),
    ("Fromage", "Saint Nectaire", Decimal("8.00"), PRICE_UNIT_FIXED),
    ("Fromage", "Comté", Decimal("8.00"), PRICE_UNIT_FIXED),
    ("Fromage", "Brie de Melun", Decimal("8.00"), PRICE_UNIT_FIXED),
    ("Dessert", "Mousse au chocolat", Decimal("9.00"), PRICE_UNIT_FIXED),
    ("Dessert", "Crème au caramel", Decimal("9.00"), PRICE_UNIT_FIXED),
    ("Dessert", "Tarte aux poires", Decimal("9.00"), PRICE_UNIT_FIXED),
]
