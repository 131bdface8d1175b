from fastapi import APIRouter
from . import products, categories, site_config, change_requests, orders, dashboard, exports


router = APIRouter()
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(site_config.router, prefix="/site-config", tags=["site-config"])
router.include_router(change_requests.router, prefix="/change-requests", tags=["change-requests"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(exports.router, prefix="/exports", tags=["exports"])
