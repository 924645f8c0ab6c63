from stockcheck.api.health import router as health_router
from stockcheck.api.inventory import router as inventory_router
from stockcheck.api.stock import router as stock_router

__all__ = [
    "health_router",
    "inventory_router",
    "stock_router",
]
