"""API endpoints for recurring transaction templates and materialization."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import date
from typing import List

from app.dependencies import get_db
from app.exceptions import StoreUnavailable
from app.schemas.recurring import MaterializationResponse, RecurringTemplateResponse
from app.services.app_state import AppStateStore
from app.services.materializer import RecurringMaterializer
from app.services.recurrence_rules import next_occurrence
from app.services.transaction_store import TransactionStore

router = APIRouter(prefix="/recurring", tags=["recurring"])


@router.get("", response_model=List[RecurringTemplateResponse])
def list_recurring_templates(db: Session = Depends(get_db)):
    """Get all recurring templates with the date each will next materialize."""
    today = date.today()
    result = []
    for template in TransactionStore(db).list_recurring_templates():
        result.append(RecurringTemplateResponse(
            id=template.id,
            type=template.type.value,
            category=template.category.value,
            amount=template.amount,
            description=template.description,
            recurring_frequency=template.spec,
            spec_error=template.spec_error,
            next_occurrence=next_occurrence(template.spec, today) if template.spec else None,
        ))
    return result


@router.post("/materialize", response_model=MaterializationResponse)
def materialize_recurring(db: Session = Depends(get_db)):
    """Run a materialization pass now (no-op if one already ran today)."""
    materializer = RecurringMaterializer(TransactionStore(db), AppStateStore(db))
    try:
        result = materializer.materialize()
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    return MaterializationResponse(
        first_launch=result.first_launch,
        already_ran_today=result.already_ran_today,
        window_start=result.window_start,
        window_end=result.window_end,
        created=result.created,
        created_ids=result.created_ids,
        skipped_templates=result.skipped_templates,
        failed_occurrences=len(result.failed_occurrences),
        last_open=result.last_open,
    )
