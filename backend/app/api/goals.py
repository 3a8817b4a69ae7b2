"""
Goal API endpoints.
"""

from fastapi import APIRouter, Depends

from app.dependencies import get_app_state_store
from app.schemas.goal import Goals
from app.services import goals_service
from app.services.app_state import AppStateStore

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=Goals)
def get_goals(store: AppStateStore = Depends(get_app_state_store)):
    """Get the savings and income goals."""
    return goals_service.get_goals(store)


@router.put("", response_model=Goals)
def update_goals(
    goals: Goals,
    store: AppStateStore = Depends(get_app_state_store)
):
    """Replace the savings and income goals."""
    return goals_service.set_goals(store, goals)
