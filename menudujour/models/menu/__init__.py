from .category import Category
from .product import Product
from .daily_menu import DailyMenu, DailyMenuItem
