"""Vocabulary item model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from vocabkeep.db.base import Base
from vocabkeep.db.types import UTCDateTime, utcnow


class VocabularyItem(Base):
    """
    One vocabulary entry (term + definition) owned by a tenant.

    Retirement is a soft delete: ``deleted_at`` is stamped and the row stays.
    Terms are unique per tenant among items that are not retired.
    """

    __tablename__ = "vocabulary_items"

    item_id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    tenant_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    term: Mapped[str] = mapped_column(String(255), nullable=False)
    definition: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime, nullable=True, comment="Set when the item is retired"
    )

    __table_args__ = (
        Index(
            "uq_vocabulary_items_tenant_term_active",
            "tenant_id",
            "term",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
        Index("idx_vocabulary_items_tenant_created", "tenant_id", "created_at"),
    )

    @property
    def is_retired(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return f"<VocabularyItem {self.item_id} term={self.term!r}>"
