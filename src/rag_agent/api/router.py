"""API router configuration."""

from fastapi import APIRouter

from rag_agent.api.endpoints import health, message

# Agent router
api_router = APIRouter(prefix="/agent")
api_router.include_router(message.router)

# Health router at root level
health_router = health.router
