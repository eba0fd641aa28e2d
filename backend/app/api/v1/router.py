# backend/app/api/v1/router.py
from fastapi import APIRouter
from .endpoints import health, messages, validation

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(validation.router, prefix="/validation", tags=["validation"])
