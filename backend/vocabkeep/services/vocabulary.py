"""Vocabulary item service: creation with progress bootstrap, edits, retirement."""

import logging
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vocabkeep.core.app_exceptions import (
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from vocabkeep.db.session import unit_of_work
from vocabkeep.db.types import utcnow
from vocabkeep.learning_engine.srs.levels import ProgressLevel, initial_due_at
from vocabkeep.models.progress import LearningProgress
from vocabkeep.models.vocabulary import VocabularyItem
from vocabkeep.repositories.items import (
    add_item,
    get_active_item,
    list_active_items,
    retire_item,
    term_exists,
)
from vocabkeep.repositories.progress import add_progress

logger = logging.getLogger(__name__)


def _require_text(value: str | None, field: str) -> str:
    """Strip a required text field, rejecting empty values."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{field} must not be empty", details={"field": field})
    return cleaned


def _duplicate_term(term: str) -> ConflictError:
    return ConflictError("Term already exists", details={"term": term})


def create_item(
    db: Session,
    tenant_id: UUID,
    term: str,
    definition: str,
    now: datetime | None = None,
) -> VocabularyItem:
    """
    Create a vocabulary item together with its initial progress row.

    Both rows are written in one unit of work: the item and a Level 1
    progress due one day from now exist together or not at all.

    Raises:
        InvalidInputError: Empty term or definition
        ConflictError: The tenant already has an active item with this term
        InternalError: The store failed
    """
    term = _require_text(term, "term")
    definition = _require_text(definition, "definition")
    now = now or utcnow()

    with unit_of_work(db, "create_item"):
        if term_exists(db, tenant_id, term):
            raise _duplicate_term(term)

        item = VocabularyItem(
            item_id=uuid4(),
            tenant_id=tenant_id,
            term=term,
            definition=definition,
            created_at=now,
            updated_at=now,
        )
        try:
            add_item(db, item)
            add_progress(
                db,
                LearningProgress(
                    progress_id=uuid4(),
                    tenant_id=tenant_id,
                    item_id=item.item_id,
                    level=int(ProgressLevel.LEVEL_1),
                    next_due_at=initial_due_at(now),
                    created_at=now,
                    updated_at=now,
                ),
            )
        except IntegrityError as e:
            # Lost a race against a concurrent insert of the same term
            logger.info(
                "Duplicate term rejected by constraint",
                extra={"tenant_id": str(tenant_id), "error": str(e.orig)},
            )
            raise _duplicate_term(term) from e

    logger.info(
        "Vocabulary item created",
        extra={"tenant_id": str(tenant_id), "item_id": str(item.item_id)},
    )
    return item


def get_item(db: Session, tenant_id: UUID, item_id: UUID) -> VocabularyItem:
    """Return an active item of the tenant, or raise NotFoundError."""
    try:
        item = get_active_item(db, tenant_id, item_id)
    except SQLAlchemyError as e:
        logger.error("Error loading item", extra={"item_id": str(item_id), "error": str(e)}, exc_info=True)
        raise InternalError("Failed to load item") from e
    if item is None:
        raise NotFoundError("Vocabulary item not found", details={"item_id": str(item_id)})
    return item


def list_items(db: Session, tenant_id: UUID) -> list[VocabularyItem]:
    """Return all active items of the tenant, newest first."""
    try:
        return list_active_items(db, tenant_id)
    except SQLAlchemyError as e:
        logger.error("Error listing items", extra={"tenant_id": str(tenant_id), "error": str(e)}, exc_info=True)
        raise InternalError("Failed to list items") from e


def update_item(
    db: Session,
    tenant_id: UUID,
    item_id: UUID,
    term: str | None = None,
    definition: str | None = None,
) -> VocabularyItem:
    """
    Edit the term and/or definition of an active item.

    The uniqueness check for a new term runs in the same unit of work as the
    write. Omitted or unchanged fields are left alone.

    Raises:
        NotFoundError: No active item with this id for the tenant
        InvalidInputError: A provided field is empty
        ConflictError: Another active item of the tenant uses the new term
        InternalError: The store failed
    """
    if term is not None:
        term = _require_text(term, "term")
    if definition is not None:
        definition = _require_text(definition, "definition")

    with unit_of_work(db, "update_item"):
        item = get_active_item(db, tenant_id, item_id, for_update=True)
        if item is None:
            raise NotFoundError("Vocabulary item not found", details={"item_id": str(item_id)})

        changed = False
        if term is not None and term != item.term:
            if term_exists(db, tenant_id, term, exclude_item_id=item_id):
                raise _duplicate_term(term)
            item.term = term
            changed = True
        if definition is not None and definition != item.definition:
            item.definition = definition
            changed = True

        if changed:
            try:
                db.flush()
            except IntegrityError as e:
                raise _duplicate_term(item.term) from e

    if changed:
        logger.info(
            "Vocabulary item updated",
            extra={"tenant_id": str(tenant_id), "item_id": str(item_id)},
        )
    return item


def delete_item(db: Session, tenant_id: UUID, item_id: UUID, now: datetime | None = None) -> None:
    """
    Retire an item (soft delete).

    The progress row stays in place and is hidden from every read from now on.

    Raises:
        NotFoundError: No active item with this id for the tenant
        InternalError: The store failed
    """
    with unit_of_work(db, "delete_item"):
        item = get_active_item(db, tenant_id, item_id, for_update=True)
        if item is None:
            raise NotFoundError("Vocabulary item not found", details={"item_id": str(item_id)})
        retire_item(db, item, now or utcnow())

    logger.info(
        "Vocabulary item retired",
        extra={"tenant_id": str(tenant_id), "item_id": str(item_id)},
    )
