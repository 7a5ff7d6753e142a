"""Item store: tenant-scoped queries over vocabulary items.

``active_items_clause`` is the single place the soft-delete filter is
written. Every read of items (and every join from progress to items) goes
through it.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from vocabkeep.models.vocabulary import VocabularyItem


def active_items_clause(tenant_id: UUID) -> ColumnElement[bool]:
    """Items owned by ``tenant_id`` that have not been retired."""
    return and_(
        VocabularyItem.tenant_id == tenant_id,
        VocabularyItem.deleted_at.is_(None),
    )


def add_item(db: Session, item: VocabularyItem) -> VocabularyItem:
    """Stage a new item and flush so constraint violations surface here."""
    db.add(item)
    db.flush()
    return item


def get_active_item(
    db: Session, tenant_id: UUID, item_id: UUID, *, for_update: bool = False
) -> VocabularyItem | None:
    """Point lookup of an active item, or None."""
    stmt = select(VocabularyItem).where(
        VocabularyItem.item_id == item_id,
        active_items_clause(tenant_id),
    )
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def list_active_items(db: Session, tenant_id: UUID) -> list[VocabularyItem]:
    """All active items of a tenant, newest first."""
    stmt = (
        select(VocabularyItem)
        .where(active_items_clause(tenant_id))
        .order_by(VocabularyItem.created_at.desc(), VocabularyItem.item_id)
    )
    return list(db.execute(stmt).scalars().all())


def term_exists(
    db: Session, tenant_id: UUID, term: str, exclude_item_id: UUID | None = None
) -> bool:
    """Whether an active item of the tenant already uses ``term``."""
    stmt = select(func.count()).select_from(VocabularyItem).where(
        active_items_clause(tenant_id),
        VocabularyItem.term == term,
    )
    if exclude_item_id is not None:
        stmt = stmt.where(VocabularyItem.item_id != exclude_item_id)
    return db.execute(stmt).scalar_one() > 0


def retire_item(db: Session, item: VocabularyItem, now: datetime) -> None:
    """Soft-delete an item. Its progress row is left in place."""
    item.deleted_at = now
    db.flush()
