"""Pydantic schemas for reviews."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReviewWordOut(BaseModel):
    """One due item in the review list."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    word_id: UUID = Field(validation_alias="item_id")
    term: str
    definition: str
    level: int = Field(..., description="Mastery level 1-3")


class ReviewSubmit(BaseModel):
    """Review outcome submitted by the learner."""

    is_correct: bool = Field(..., description="Whether the learner recalled the definition")
