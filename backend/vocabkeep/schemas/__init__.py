"""Request and response schemas."""

from vocabkeep.schemas.review import ReviewSubmit, ReviewWordOut
from vocabkeep.schemas.vocabulary import ItemCreate, ItemOut, ItemUpdate

__all__ = [
    "ItemCreate",
    "ItemOut",
    "ItemUpdate",
    "ReviewSubmit",
    "ReviewWordOut",
]
