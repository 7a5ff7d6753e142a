"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from vocabkeep.api.v1.endpoints import health, reviews, words

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(words.router, prefix="", tags=["Words"])
api_router.include_router(reviews.router, prefix="", tags=["Reviews"])
