from fastapi import APIRouter

from dealership.api.v1.health import router as health_router
from dealership.api.v1.auth.router import router as auth_router
from dealership.api.v1.users.router import router as users_router
from dealership.api.v1.cars.router import router as cars_router
from dealership.api.v1.loans.router import router as loans_router
from dealership.api.v1.inquiries.router import router as inquiries_router
from dealership.api.v1.dashboard.router import router as dashboard_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(cars_router, prefix="/cars", tags=["cars"])
api_router.include_router(loans_router, prefix="/loans", tags=["loans"])
api_router.include_router(inquiries_router, prefix="/inquiries", tags=["sell-inquiries"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["admin-dashboard"])
