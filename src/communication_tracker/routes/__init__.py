"""API routers, one per resource."""

from communication_tracker.routes.communications import router as communications_router
from communication_tracker.routes.companies import router as companies_router
from communication_tracker.routes.health import router as health_router
from communication_tracker.routes.next_communications import router as next_communications_router

__all__ = ["communications_router", "companies_router", "health_router", "next_communications_router"]
