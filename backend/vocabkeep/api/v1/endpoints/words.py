"""Vocabulary word endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from vocabkeep.core.dependencies import TenantId, get_db
from vocabkeep.schemas.vocabulary import ItemCreate, ItemOut, ItemUpdate
from vocabkeep.services import vocabulary

router = APIRouter()


@router.post("/words", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_word(
    payload: ItemCreate,
    tenant_id: TenantId,
    db: Annotated[Session, Depends(get_db)],
) -> ItemOut:
    """Create a word and schedule its first review for tomorrow."""
    item = vocabulary.create_item(db, tenant_id, payload.term, payload.definition)
    return ItemOut.model_validate(item)


@router.get("/words", response_model=list[ItemOut])
def list_words(
    tenant_id: TenantId,
    db: Annotated[Session, Depends(get_db)],
) -> list[ItemOut]:
    """List the tenant's words, newest first."""
    return [ItemOut.model_validate(item) for item in vocabulary.list_items(db, tenant_id)]


@router.get("/words/{word_id}", response_model=ItemOut)
def get_word(
    word_id: UUID,
    tenant_id: TenantId,
    db: Annotated[Session, Depends(get_db)],
) -> ItemOut:
    return ItemOut.model_validate(vocabulary.get_item(db, tenant_id, word_id))


@router.put("/words/{word_id}", response_model=ItemOut)
def update_word(
    word_id: UUID,
    payload: ItemUpdate,
    tenant_id: TenantId,
    db: Annotated[Session, Depends(get_db)],
) -> ItemOut:
    """Edit a word's term and/or definition."""
    item = vocabulary.update_item(
        db, tenant_id, word_id, term=payload.term, definition=payload.definition
    )
    return ItemOut.model_validate(item)


@router.delete("/words/{word_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_word(
    word_id: UUID,
    tenant_id: TenantId,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Retire a word. It disappears from listings and reviews."""
    vocabulary.delete_item(db, tenant_id, word_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
