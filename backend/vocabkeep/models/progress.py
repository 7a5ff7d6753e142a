"""Learning progress model: the scheduling state of one vocabulary item."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Index, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vocabkeep.db.base import Base
from vocabkeep.db.types import UTCDateTime, utcnow
from vocabkeep.models.vocabulary import VocabularyItem


class LearningProgress(Base):
    """
    Per-tenant per-item mastery level and next due timestamp.

    Exactly one row per (tenant_id, item_id). The row is never deleted on its
    own; once its item is retired every read path treats it as absent.
    """

    __tablename__ = "learning_progress"

    progress_id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    tenant_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    item_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("vocabulary_items.item_id"), nullable=False
    )

    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1, comment="Mastery level 1-3")
    next_due_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    last_reviewed_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    item: Mapped[VocabularyItem | None] = relationship(VocabularyItem)

    __table_args__ = (
        UniqueConstraint("tenant_id", "item_id", name="uq_learning_progress_tenant_item"),
        Index("idx_learning_progress_tenant_due", "tenant_id", "next_due_at", "level"),
    )

    def __repr__(self) -> str:
        return f"<LearningProgress {self.progress_id} item={self.item_id} level={self.level}>"
