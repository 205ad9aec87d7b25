from .router import router
from .service import StationService

__all__ = ["router", "StationService"]
