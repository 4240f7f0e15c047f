# menudujour/utils/tenant.py
from typing import Optional

from menudujour.models.user import User


def get_current_restaurant_id(user: Optional[User]) -> Optional[int]:
    """
    The restaurant every catalog/menu operation is scoped to.

    Always taken from the session user, never from the request payload.
    None (not linked yet) makes the crud layer answer "unauthenticated".
    """
    if user is None:
        return None
    return user.restaurant_id
