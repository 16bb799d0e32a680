from fastapi import APIRouter
from sheetbudget.app.api.v1 import auth, budgets, dashboard, expenses

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(budgets.router, prefix="/budget", tags=["budget"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
