"""Template engine facade.

Bundles the scanner, validators, renderer and the configured extraction
strategy behind one object that the request layer can hold on to. The engine
keeps no per-call state, so a single instance is safe to share.
"""

import logging
from datetime import date
from typing import Any

from prompt_engine.interfaces.template import BaseCandidateExtractor
from prompt_engine.strategies.template_engine.extractor import PriorityCandidateExtractor
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
from prompt_engine.strategies.template_engine.variable_types import DEFAULT_DATE_FORMAT

logger = logging.getLogger(__name__)


class TemplateEngine:
    """Scans, validates, renders and bootstraps prompt templates."""

    def __init__(
        self,
        extractor: BaseCandidateExtractor | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        """Initialize the engine.

        Args:
            extractor: Extraction strategy. Defaults to the priority extractor.
            date_format: strftime format used when rendering date variables.
        """
        self._extractor = extractor or PriorityCandidateExtractor()
        self._date_format = date_format

        logger.info(
            f"TemplateEngine initialized: extractor={self._extractor.strategy_name}, "
            f"date_format={date_format!r}"
        )

    @property
    def extractor(self) -> BaseCandidateExtractor:
        return self._extractor

    def scan_variables(self, content: str) -> list[str]:
        return scan_variables(content)

    def validate_template(self, content: str) -> TemplateValidationResult:
        return validate_template(content)

    def validate_values(
        self, specs: list[VariableSpec], values: dict[str, Any] | None
    ) -> ValidationResult:
        return validate_values(specs, values)

    def render(
        self, content: str, specs: list[VariableSpec], values: dict[str, Any] | None
    ) -> RenderResult:
        return render(content, specs, values, date_format=self._date_format)

    def preview(
        self, content: str, specs: list[VariableSpec], values: dict[str, Any] | None
    ) -> str:
        return preview(content, specs, values, date_format=self._date_format)

    def extract_candidates(self, prompt_text: str) -> ExtractionResult:
        return self._extractor.extract(prompt_text)

    def detect_variable_specs(
        self, content: str, existing: list[VariableSpec] | None = None
    ) -> list[VariableSpec]:
        return detect_variable_specs(content, existing)

    def instantiate(
        self,
        template: Template,
        values: dict[str, Any] | None,
        title: str | None = None,
    ) -> InstantiationResult:
        """Render a stored template into a concrete prompt.

        Args:
            template: The template to instantiate.
            values: Raw runtime values keyed by variable name.
            title: Title for the new prompt. Defaults to the template title
                followed by today's date.

        Returns:
            InstantiationResult. Its content is the unrendered template
            content when validation fails.
        """
        rendered = self.render(template.content, template.variables, values)

        if not title:
            base = template.title or "Untitled template"
            title = f"{base} - {date.today().strftime(self._date_format)}"

        if rendered.validation.valid:
            logger.info(f"Instantiated template {template.id}")
        else:
            logger.info(
                f"Template {template.id} instantiation rejected: "
                f"{len(rendered.validation.errors)} validation errors"
            )

        return InstantiationResult(
            template_id=template.id,
            title=title,
            content=rendered.result,
            validation=rendered.validation,
        )


_default_engine = TemplateEngine()


def extract_candidates(prompt_text: str) -> ExtractionResult:
    """Bootstrap a template from a plain prompt with the default strategy."""
    return _default_engine.extract_candidates(prompt_text)
