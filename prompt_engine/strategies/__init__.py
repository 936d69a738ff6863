"""Concrete strategy implementations."""

from prompt_engine.strategies.template_engine import (
    PriorityCandidateExtractor,
    TemplateEngine,
    UnionCandidateExtractor,
)

__all__ = [
    "PriorityCandidateExtractor",
    "UnionCandidateExtractor",
    "TemplateEngine",
]
