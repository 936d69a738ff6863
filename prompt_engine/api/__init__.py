"""FastAPI routers and dependencies."""

from prompt_engine.api.deps import get_engine, get_factory
from prompt_engine.api.templates import router as templates_router

__all__ = [
    "get_engine",
    "get_factory",
    "templates_router",
]
