"""
Main API router.
"""

from fastapi import APIRouter
from app.api import transactions, recurring, budgets, goals, dashboard

api_router = APIRouter()

api_router.include_router(transactions.router)
api_router.include_router(recurring.router)
api_router.include_router(budgets.router)
api_router.include_router(goals.router)
api_router.include_router(dashboard.router)
