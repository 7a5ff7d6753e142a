"""Database models."""

# Import all models here so Alembic can detect them
from vocabkeep.models.progress import LearningProgress
from vocabkeep.models.vocabulary import VocabularyItem

__all__ = [
    "VocabularyItem",
    "LearningProgress",
]
