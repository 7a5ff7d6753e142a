"""Review endpoints - today's due words and outcome submission."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from vocabkeep.core.dependencies import Engine, TenantId, get_db
from vocabkeep.schemas.review import ReviewSubmit, ReviewWordOut

router = APIRouter()


@router.get("/reviews", response_model=list[ReviewWordOut])
def get_review_words(
    tenant_id: TenantId,
    engine: Engine,
    db: Annotated[Session, Depends(get_db)],
) -> list[ReviewWordOut]:
    """
    Get the words due for review now.

    Oldest-due first, less-mastered first on ties, capped at the configured
    review limit.
    """
    due_items = engine.get_due_items(db, tenant_id)
    return [ReviewWordOut.model_validate(due) for due in due_items]


@router.post("/reviews/{word_id}", status_code=status.HTTP_204_NO_CONTENT)
def submit_review_result(
    word_id: UUID,
    payload: ReviewSubmit,
    tenant_id: TenantId,
    engine: Engine,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Record whether the learner answered correctly and reschedule the word."""
    engine.record_outcome(db, tenant_id, word_id, payload.is_correct)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
