"""Template extraction interfaces.

Defines the abstract base class for strategies that propose template
variables from a plain, not-yet-templated prompt.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prompt_engine.strategies.template_engine.models import ExtractionResult


class BaseCandidateExtractor(ABC):
    """Abstract base class for heuristic extraction strategies.

    Detects variable-like tokens in prompt text and rewrites them into
    ``{{name}}`` placeholders. The output should be re-checked with the
    template syntax validator before it is accepted as a template.
    """

    @abstractmethod
    def extract(self, prompt_text: str) -> "ExtractionResult":
        """Detect candidates and rewrite the prompt.

        Args:
            prompt_text: Prompt text without existing placeholder syntax.

        Returns:
            ExtractionResult with the templated content and the detected
            variable names in detection order.

        Raises:
            TypeError: If prompt_text is not a str.
        """

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Name used to select this strategy in configuration."""
