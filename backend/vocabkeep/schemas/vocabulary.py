"""Pydantic schemas for vocabulary items."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# Validation caps (input hardening)
TERM_MAX_LENGTH = 255
DEFINITION_MAX_LENGTH = 4000


class ItemCreate(BaseModel):
    """Schema for creating a vocabulary item."""

    term: str = Field(..., max_length=TERM_MAX_LENGTH, description="Word or phrase to learn")
    definition: str = Field(..., max_length=DEFINITION_MAX_LENGTH, description="Meaning of the term")


class ItemUpdate(BaseModel):
    """Schema for updating a vocabulary item (all fields optional)."""

    term: str | None = Field(None, max_length=TERM_MAX_LENGTH)
    definition: str | None = Field(None, max_length=DEFINITION_MAX_LENGTH)


class ItemOut(BaseModel):
    """Vocabulary item response schema."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    word_id: UUID = Field(validation_alias="item_id")
    term: str
    definition: str
    created_at: datetime
    updated_at: datetime
