"""
Scheduling engine - selects due items and applies review outcomes.

Main responsibilities:
- Serve the due set of a tenant, capped at the configured review limit
- Apply a review outcome to an item's progress inside one transaction
- Seed a missing progress row for an active item on its first outcome

The engine holds no mutable state. All state lives in the database and
every operation runs against the session handed in by the caller.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vocabkeep.core.app_exceptions import InternalError, InvalidInputError, NotFoundError
from vocabkeep.db.session import unit_of_work
from vocabkeep.db.types import utcnow
from vocabkeep.learning_engine.srs.levels import ProgressLevel, next_transition
from vocabkeep.models.progress import LearningProgress
from vocabkeep.repositories.items import get_active_item
from vocabkeep.repositories.progress import (
    add_progress,
    find_due_progress,
    find_unservable_due_progress,
    get_active_progress,
    get_progress_for_update,
    save_progress,
)


@dataclass(frozen=True)
class DueItem:
    """One entry of the due set, ready for a review prompt."""

    item_id: UUID
    term: str
    definition: str
    level: int
    next_due_at: datetime


@dataclass(frozen=True)
class OutcomeResult:
    """State of a progress row after a recorded outcome."""

    item_id: UUID
    previous_level: int
    level: int
    interval_days: int
    next_due_at: datetime
    last_reviewed_at: datetime
    created: bool  # True when the progress row was seeded by this outcome


class SchedulingEngine:
    """Spaced-repetition scheduler over the progress and item stores."""

    def __init__(
        self,
        review_limit: int,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ):
        if review_limit <= 0:
            raise ValueError("review_limit must be positive")
        self.review_limit = review_limit
        self._clock = clock or utcnow
        self._logger = logger or logging.getLogger(__name__)

    def now(self) -> datetime:
        return self._clock()

    def get_due_items(
        self,
        db: Session,
        tenant_id: UUID,
        as_of: datetime | None = None,
        limit: int | None = None,
    ) -> list[DueItem]:
        """
        Items of ``tenant_id`` due for review at ``as_of``.

        Args:
            db: Database session
            tenant_id: Owning tenant
            as_of: Cutoff timestamp (aware); defaults to now
            limit: Cap on the result size; defaults to the configured limit

        Returns:
            Due items ordered by next_due_at, then level, at most ``limit``
        """
        if limit is None:
            limit = self.review_limit
        elif limit <= 0:
            raise InvalidInputError("limit must be positive", details={"limit": limit})

        if as_of is None:
            as_of = self.now()
        elif as_of.tzinfo is None:
            raise InvalidInputError("as_of must be timezone-aware")

        try:
            rows = find_due_progress(db, tenant_id, as_of, limit)
            unservable = find_unservable_due_progress(db, tenant_id, as_of)
        except SQLAlchemyError as e:
            self._logger.error(
                "Error finding due items",
                extra={"tenant_id": str(tenant_id), "error": str(e)},
                exc_info=True,
            )
            raise InternalError("Failed to load due items") from e

        for row in unservable:
            # Never served; the limit counts servable rows only
            self._logger.warning(
                "Skipping due progress with missing item"
                if row.item_tenant_id is None
                else "Skipping due progress whose item belongs to another tenant",
                extra={
                    "tenant_id": str(tenant_id),
                    "progress_id": str(row.progress_id),
                    "item_id": str(row.item_id),
                },
            )

        return [
            DueItem(
                item_id=progress.item_id,
                term=progress.item.term,
                definition=progress.item.definition,
                level=progress.level,
                next_due_at=progress.next_due_at,
            )
            for progress in rows
        ]

    def get_progress(self, db: Session, tenant_id: UUID, item_id: UUID) -> LearningProgress:
        """Progress of an active item, or NotFoundError."""
        try:
            progress = get_active_progress(db, tenant_id, item_id)
        except SQLAlchemyError as e:
            self._logger.error(
                "Error loading progress",
                extra={"tenant_id": str(tenant_id), "item_id": str(item_id), "error": str(e)},
                exc_info=True,
            )
            raise InternalError("Failed to load progress") from e
        if progress is None:
            raise NotFoundError("Progress not found", details={"item_id": str(item_id)})
        return progress

    def record_outcome(
        self, db: Session, tenant_id: UUID, item_id: UUID, correct: bool
    ) -> OutcomeResult:
        """
        Apply one review outcome to an item's progress.

        Runs as a single unit of work: the progress row is locked, moved
        through the level state machine, stamped and saved, or nothing is
        written at all.

        Raises:
            NotFoundError: The item does not exist for this tenant or is retired
            InternalError: The store failed
        """
        log_extra = {"tenant_id": str(tenant_id), "item_id": str(item_id)}

        with unit_of_work(db, "record_outcome"):
            now = self.now()
            created = False

            progress = get_progress_for_update(db, tenant_id, item_id)
            if progress is None:
                item = get_active_item(db, tenant_id, item_id, for_update=True)
                if item is None:
                    self._logger.info("Outcome for unknown item", extra=log_extra)
                    raise NotFoundError("Vocabulary item not found", details={"item_id": str(item_id)})

                self._logger.warning("Progress missing for active item, seeding at level 1", extra=log_extra)
                progress = add_progress(
                    db,
                    LearningProgress(
                        tenant_id=tenant_id,
                        item_id=item_id,
                        level=int(ProgressLevel.LEVEL_1),
                        next_due_at=now,
                    ),
                )
                created = True
            else:
                item = progress.item
                if item is None or item.is_retired or item.tenant_id != tenant_id:
                    self._logger.info("Outcome for retired or missing item", extra=log_extra)
                    raise NotFoundError("Vocabulary item not found", details={"item_id": str(item_id)})

            previous_level = progress.level
            transition = next_transition(previous_level, correct)
            if transition.normalized:
                self._logger.warning(
                    "Invalid progress level found, resetting to level 1",
                    extra={**log_extra, "progress_id": str(progress.progress_id), "raw_level": previous_level},
                )

            progress.level = int(transition.level)
            progress.next_due_at = transition.due_at(now)
            progress.last_reviewed_at = now
            save_progress(db, progress)

        self._logger.info(
            "Review outcome recorded",
            extra={
                **log_extra,
                "correct": correct,
                "previous_level": previous_level,
                "level": progress.level,
                "interval_days": transition.interval_days,
            },
        )
        return OutcomeResult(
            item_id=item_id,
            previous_level=previous_level,
            level=progress.level,
            interval_days=transition.interval_days,
            next_due_at=progress.next_due_at,
            last_reviewed_at=now,
            created=created,
        )
