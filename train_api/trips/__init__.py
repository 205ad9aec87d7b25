from .router import router
from .service import TripService

__all__ = ["router", "TripService"]
