"""Abstract base classes for template engine strategies."""

from prompt_engine.interfaces.template import BaseCandidateExtractor

__all__ = [
    "BaseCandidateExtractor",
]
