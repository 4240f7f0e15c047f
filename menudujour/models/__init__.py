from .base import Base
from .restaurant import Restaurant
from .user import User
from .invite import Invite
from .menu.category import Category
from .menu.product import Product
from .menu.daily_menu import DailyMenu, DailyMenuItem
