"""Template engine strategies.

Implements placeholder scanning, template and value validation, rendering,
and heuristic template extraction for prompt templates.
"""

from prompt_engine.strategies.template_engine.engine import TemplateEngine, extract_candidates
from prompt_engine.strategies.template_engine.extractor import (
    PriorityCandidateExtractor,
    UnionCandidateExtractor,
)
from prompt_engine.strategies.template_engine.models import (
    ExtractionResult,
    InstantiationResult,
    RenderResult,
    Template,
    TemplateValidationResult,
    ValidationResult,
    VariableSpec,
)
from prompt_engine.strategies.template_engine.renderer import preview, render
from prompt_engine.strategies.template_engine.scanner import detect_variable_specs, scan_variables
from prompt_engine.strategies.template_engine.validator import validate_template, validate_values
from prompt_engine.strategies.template_engine.variable_types import VariableType, coerce_default

__all__ = [
    "TemplateEngine",
    "PriorityCandidateExtractor",
    "UnionCandidateExtractor",
    "ExtractionResult",
    "InstantiationResult",
    "RenderResult",
    "Template",
    "TemplateValidationResult",
    "ValidationResult",
    "VariableSpec",
    "VariableType",
    "coerce_default",
    "detect_variable_specs",
    "extract_candidates",
    "preview",
    "render",
    "scan_variables",
    "validate_template",
    "validate_values",
]
