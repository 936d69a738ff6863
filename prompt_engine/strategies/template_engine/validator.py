"""Template syntax and variable value validation.

Both validators collect every problem into a structured result instead of
raising, so a caller can report all of them in one round trip.
"""

import logging
import re
from typing import Any

from prompt_engine.strategies.template_engine.models import (
    TemplateValidationResult,
    ValidationResult,
    VariableSpec,
)
from prompt_engine.strategies.template_engine.scanner import PLACEHOLDER_PATTERN, require_text
from prompt_engine.strategies.template_engine.variable_types import get_handler, is_blank

logger = logging.getLogger(__name__)

OPEN_DELIMITER = "{{"
CLOSE_DELIMITER = "}}"

_DELIMITED_PATTERN = re.compile(r"\{\{([^}]*)\}\}")
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def validate_template(content: str) -> TemplateValidationResult:
    """Check template content for structural problems.

    Checks, all reported independently:
    1. Equal number of opening and closing delimiters.
    2. Every delimited token is a legal identifier.
    3. Literal text remains once placeholders are removed.

    Args:
        content: Template text.

    Returns:
        TemplateValidationResult listing every error found.
    """
    require_text(content)
    errors: list[str] = []

    if content.count(OPEN_DELIMITER) != content.count(CLOSE_DELIMITER):
        errors.append("Template has mismatched variable brackets")

    for match in _DELIMITED_PATTERN.finditer(content):
        token = match.group(1)
        if not _IDENTIFIER_PATTERN.fullmatch(token):
            errors.append(
                f"Invalid variable name: {token}. Use only letters, numbers, and underscores."
            )

    if not PLACEHOLDER_PATTERN.sub("", content).strip():
        errors.append("Template cannot be empty after variable removal")

    return TemplateValidationResult(valid=not errors, errors=errors)


def validate_values(
    specs: list[VariableSpec],
    values: dict[str, Any] | None,
) -> ValidationResult:
    """Validate a value map against declared variable specs.

    Args:
        specs: Declared variables.
        values: Raw runtime values keyed by variable name.

    Returns:
        ValidationResult with missing required names and per-variable
        constraint violations.
    """
    values = values or {}
    missing_required: list[str] = []
    invalid_types: dict[str, str] = {}
    errors: list[str] = []

    for spec in specs:
        value = values.get(spec.name)

        if is_blank(value):
            if spec.required and spec.default_value is None:
                missing_required.append(spec.name)
                errors.append(f"{spec.name} is required")
            continue

        message = get_handler(spec.variable_type).validate(value, spec)
        if message:
            invalid_types[spec.name] = message
            errors.append(f"{spec.name}: {message}")

    valid = not missing_required and not invalid_types
    if not valid:
        logger.debug(
            f"Value validation failed: missing={missing_required}, "
            f"invalid={sorted(invalid_types)}"
        )

    return ValidationResult(
        valid=valid,
        missing_required=missing_required,
        invalid_types=invalid_types,
        errors=errors,
    )
