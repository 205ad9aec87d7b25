from .router import router
from .dependencies import get_current_user, require_write_scope
from .schemas import CurrentUser

__all__ = [
    "router",
    "get_current_user",
    "require_write_scope",
    "CurrentUser",
]
