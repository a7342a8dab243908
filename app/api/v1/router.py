# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.cars.router import router as cars_router
from app.modules.customers.router import router as customers_router
from app.modules.employees.router import router as employees_router
from app.modules.sales.router import router as sales_router
from app.modules.services.router import router as services_router
from app.modules.users.router import router as users_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

# ==================== DEALERSHIP ====================

api_router.include_router(
    cars_router,
    prefix="/cars",
    tags=["Cars"]
)

api_router.include_router(
    customers_router,
    prefix="/customers",
    tags=["Customers"]
)

api_router.include_router(
    employees_router,
    prefix="/employees",
    tags=["Employees"]
)

api_router.include_router(
    sales_router,
    prefix="/sales",
    tags=["Sales"]
)

api_router.include_router(
    services_router,
    prefix="/services",
    tags=["Services"]
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)


@api_router.get("/")
async def api_root():
    return {
        "message": "Dealership API v1",
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "authentication": "/api/v1/auth",
            "cars": "/api/v1/cars",
            "customers": "/api/v1/customers",
            "employees": "/api/v1/employees",
            "sales": "/api/v1/sales",
            "services": "/api/v1/services",
            "users": "/api/v1/users"
        }
    }
