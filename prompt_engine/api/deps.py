"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The shared component factory
- The configured template engine
"""

import logging

from fastapi import Depends, HTTPException, status

from prompt_engine.core.config import Settings, get_settings
from prompt_engine.core.factory import ComponentFactory
from prompt_engine.strategies.template_engine import TemplateEngine

logger = logging.getLogger(__name__)

_factory: ComponentFactory | None = None


def get_factory(settings: Settings = Depends(get_settings)) -> ComponentFactory:
    """Dependency for the process-wide component factory.

    Args:
        settings: Application settings.

    Returns:
        The shared ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory(settings)
    return _factory


def get_engine(factory: ComponentFactory = Depends(get_factory)) -> TemplateEngine:
    """Dependency for the configured template engine.

    Raises:
        HTTPException: If the configured strategy cannot be instantiated.
    """
    try:
        return factory.get_engine()
    except ValueError as e:
        logger.error(f"Error creating template engine: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Template engine misconfigured",
        ) from e


def ensure_within_limit(text: str, settings: Settings, field: str = "content") -> None:
    """Reject text longer than the configured maximum.

    Raises:
        HTTPException: 413 if the text exceeds max_content_length.
    """
    if len(text) > settings.max_content_length:
        raise HTTPException(
            status_code=413,
            detail=f"{field} exceeds {settings.max_content_length} characters",
        )
