"""Test seed helpers for creating test data."""

import uuid
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vocabkeep.models.progress import LearningProgress
from vocabkeep.models.vocabulary import VocabularyItem


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        """Move forward by ``timedelta(**kwargs)`` and return the new time."""
        self.now = self.now + timedelta(**kwargs)
        return self.now


def create_item_without_progress(
    db: Session,
    tenant_id: uuid.UUID,
    term: str | None = None,
    definition: str = "a test definition",
    created_at: datetime | None = None,
) -> VocabularyItem:
    """
    Insert an item the way an older writer would have, with no progress row.

    Args:
        db: Database session
        tenant_id: Owning tenant
        term: Item term (defaults to a unique generated term)
        definition: Item definition
        created_at: Creation timestamp (defaults to the column default)

    Returns:
        Committed VocabularyItem
    """
    item = VocabularyItem(
        item_id=uuid.uuid4(),
        tenant_id=tenant_id,
        term=term or f"term-{uuid.uuid4().hex[:8]}",
        definition=definition,
    )
    if created_at is not None:
        item.created_at = created_at
        item.updated_at = created_at
    db.add(item)
    db.commit()
    return item


def set_progress(
    db: Session,
    tenant_id: uuid.UUID,
    item_id: uuid.UUID,
    *,
    level: int | None = None,
    next_due_at: datetime | None = None,
) -> LearningProgress:
    """Overwrite stored progress fields directly, bypassing the engine."""
    progress = db.execute(
        select(LearningProgress).where(
            LearningProgress.tenant_id == tenant_id,
            LearningProgress.item_id == item_id,
        )
    ).scalar_one()
    if level is not None:
        progress.level = level
    if next_due_at is not None:
        progress.next_due_at = next_due_at
    db.commit()
    return progress


def count_rows(db: Session, model) -> int:
    """Number of rows in a model's table, retired items included."""
    return db.execute(select(func.count()).select_from(model)).scalar_one()
