"""API routes mounted under API_PREFIX."""

from fastapi import APIRouter

from bookstore.api import auth, books, health

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(health.router, prefix="/health", tags=["health"])
