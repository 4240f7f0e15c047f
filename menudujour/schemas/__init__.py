from .catalog import (
    CategoryCreate,
    CategoryRead,
    ProductCreate,
    ProductUpdate,
    ProductRead,
    ProductWithCategory,
    ProductActiveToggle,
)
from .daily_menu import (
    DailyMenuItemRead,
    DailyMenuRead,
    SaveMenuCommand,
    PublishToggle,
    ShowPricesToggle,
    DuplicateRequest,
    DuplicateOutcome,
    DashboardStats,
)
from .restaurant import (
    RestaurantRead,
    RestaurantDesignUpdate,
    RestaurantInitialize,
    InviteCreate,
    InviteRead,
)
