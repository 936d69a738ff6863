"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from prompt_engine.core.config import Settings, get_settings
from prompt_engine.interfaces.template import BaseCandidateExtractor
from prompt_engine.strategies.template_engine import TemplateEngine
from prompt_engine.strategies.template_engine.extractor import EXTRACTORS

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        settings = get_settings()
        factory = ComponentFactory(settings)

        extractor = factory.get_extractor()
        engine = factory.get_engine()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._extractor_cache: BaseCandidateExtractor | None = None
        self._engine_cache: TemplateEngine | None = None

    def get_extractor(self, extractor_type: str | None = None) -> BaseCandidateExtractor:
        """Get a candidate extractor based on the specified type.

        Args:
            extractor_type: The extractor type to instantiate. If None, uses settings.

        Returns:
            A BaseCandidateExtractor implementation instance.

        Raises:
            ValueError: If the extractor type is unknown.
        """
        if self._extractor_cache is None or extractor_type is not None:
            extractor_type = extractor_type or self._settings.extractor_type

            logger.info(f"Instantiating extractor: {extractor_type}")

            extractor_cls = EXTRACTORS.get(extractor_type)
            if extractor_cls is None:
                raise ValueError(
                    f"Unknown extractor type: {extractor_type}. "
                    f"Supported: {', '.join(sorted(EXTRACTORS))}"
                )
            self._extractor_cache = extractor_cls(min_length=self._settings.min_candidate_length)

        return self._extractor_cache

    def get_engine(self) -> TemplateEngine:
        """Get the template engine wired with the configured strategies.

        Returns:
            A cached TemplateEngine instance.
        """
        if self._engine_cache is None:
            self._engine_cache = TemplateEngine(
                extractor=self.get_extractor(),
                date_format=self._settings.date_format,
            )
        return self._engine_cache
