"""API router aggregating all endpoints."""

from fastapi import APIRouter

from repairhub.api import search

api_router = APIRouter()


@api_router.get("/health", tags=["health"])
async def health() -> dict:
    return {"status": "ok"}


api_router.include_router(search.router, prefix="/search", tags=["search"])
