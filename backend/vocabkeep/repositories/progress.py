"""Progress store: tenant-scoped queries over learning progress rows."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, contains_eager

from vocabkeep.models.progress import LearningProgress
from vocabkeep.models.vocabulary import VocabularyItem
from vocabkeep.repositories.items import active_items_clause


def add_progress(db: Session, progress: LearningProgress) -> LearningProgress:
    """Stage a new progress row and flush so constraint violations surface here."""
    db.add(progress)
    db.flush()
    return progress


def get_progress_for_update(db: Session, tenant_id: UUID, item_id: UUID) -> LearningProgress | None:
    """
    Load the progress row for (tenant, item) and lock it for the rest of the
    transaction. The item is not filtered here; callers decide what a
    retired or missing item means.
    """
    stmt = (
        select(LearningProgress)
        .where(
            LearningProgress.tenant_id == tenant_id,
            LearningProgress.item_id == item_id,
        )
        .with_for_update()
    )
    return db.execute(stmt).scalar_one_or_none()


def get_active_progress(db: Session, tenant_id: UUID, item_id: UUID) -> LearningProgress | None:
    """Point lookup of a progress row whose item is present and active."""
    stmt = (
        select(LearningProgress)
        .join(LearningProgress.item)
        .where(
            LearningProgress.tenant_id == tenant_id,
            LearningProgress.item_id == item_id,
            active_items_clause(tenant_id),
        )
        .options(contains_eager(LearningProgress.item))
    )
    return db.execute(stmt).scalar_one_or_none()


def save_progress(db: Session, progress: LearningProgress) -> LearningProgress:
    """Flush pending changes of a progress row."""
    db.add(progress)
    db.flush()
    return progress


def find_due_progress(
    db: Session, tenant_id: UUID, as_of: datetime, limit: int
) -> list[LearningProgress]:
    """
    Progress rows due at ``as_of`` whose item is active, with the item loaded.

    Ordered oldest-due first, then least-mastered first; ``progress_id``
    keeps ties stable. At most ``limit`` rows.
    """
    stmt = (
        select(LearningProgress)
        .join(VocabularyItem, VocabularyItem.item_id == LearningProgress.item_id)
        .where(
            LearningProgress.tenant_id == tenant_id,
            LearningProgress.next_due_at <= as_of,
            active_items_clause(tenant_id),
        )
        .options(contains_eager(LearningProgress.item))
        .order_by(
            LearningProgress.next_due_at.asc(),
            LearningProgress.level.asc(),
            LearningProgress.progress_id.asc(),
        )
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def find_unservable_due_progress(db: Session, tenant_id: UUID, as_of: datetime) -> list[Row]:
    """
    Due progress rows of ``tenant_id`` that ``find_due_progress`` can never
    serve because their item is missing or owned by another tenant.

    Retired items are not included. Each row carries ``progress_id``,
    ``item_id`` and ``item_tenant_id`` (None when the item is missing).
    """
    stmt = (
        select(
            LearningProgress.progress_id,
            LearningProgress.item_id,
            VocabularyItem.tenant_id.label("item_tenant_id"),
        )
        .outerjoin(VocabularyItem, VocabularyItem.item_id == LearningProgress.item_id)
        .where(
            LearningProgress.tenant_id == tenant_id,
            LearningProgress.next_due_at <= as_of,
            or_(VocabularyItem.item_id.is_(None), VocabularyItem.tenant_id != tenant_id),
        )
        .order_by(LearningProgress.progress_id)
    )
    return list(db.execute(stmt).all())
