from fastapi import APIRouter

from backend.posgo.api.v1.endpoints import (
    auth,
    bootstrap,
    customers,
    pos,
    products,
    purchases,
    receipts,
    shifts,
    store_settings,
    stores,
    suppliers,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(bootstrap.router, prefix="/bootstrap", tags=["bootstrap"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(pos.router, prefix="/pos", tags=["pos"])
api_router.include_router(shifts.router, prefix="/shifts", tags=["shifts"])
api_router.include_router(purchases.router, prefix="/purchases", tags=["purchases"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(store_settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["receipts"])
api_router.include_router(stores.router, prefix="/stores", tags=["stores"])
