"""Template rendering.

Substitutes validated, type-formatted values into template content.
Placeholders without a declared spec are left in the output untouched.
"""

import logging
import re
from typing import Any

from prompt_engine.strategies.template_engine.models import RenderResult, VariableSpec
from prompt_engine.strategies.template_engine.scanner import PLACEHOLDER_PATTERN, require_text
from prompt_engine.strategies.template_engine.validator import validate_values
from prompt_engine.strategies.template_engine.variable_types import (
    DEFAULT_DATE_FORMAT,
    get_handler,
    is_blank,
    stringify,
)

logger = logging.getLogger(__name__)


def effective_value(spec: VariableSpec, values: dict[str, Any]) -> Any:
    """Supplied value if non-blank, else the declared default, else ``""``."""
    value = values.get(spec.name)
    if not is_blank(value):
        return value
    if spec.default_value is not None:
        return spec.default_value
    return ""


def _substitute(content: str, replacements: dict[str, str]) -> str:
    """Replace every declared placeholder in a single pass.

    One pass keeps substituted values from being scanned again.
    """

    def replace(match: re.Match[str]) -> str:
        return replacements.get(match.group(1), match.group(0))

    return PLACEHOLDER_PATTERN.sub(replace, content)


def render(
    content: str,
    specs: list[VariableSpec],
    values: dict[str, Any] | None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RenderResult:
    """Render template content with validated values.

    Values are validated first. If validation fails the original content is
    returned unchanged next to the failing result, so callers must check
    ``validation.valid`` before using ``result``.

    Args:
        content: Template text.
        specs: Declared variables.
        values: Raw runtime values keyed by variable name.
        date_format: strftime format for date variables.

    Returns:
        RenderResult with the rendered text and its validation.

    Raises:
        TypeError: If content is not a str.
    """
    require_text(content)
    values = values or {}

    validation = validate_values(specs, values)
    if not validation.valid:
        return RenderResult(result=content, validation=validation)

    replacements: dict[str, str] = {}
    for spec in specs:
        value = effective_value(spec, values)
        if is_blank(value):
            replacements[spec.name] = ""
        else:
            replacements[spec.name] = get_handler(spec.variable_type).format(value, date_format)

    result = _substitute(content, replacements)
    logger.debug(f"Rendered template with {len(replacements)} declared variables")
    return RenderResult(result=result, validation=validation)


def preview(
    content: str,
    specs: list[VariableSpec],
    values: dict[str, Any] | None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Render a live preview without gating on validation.

    Variables with neither a value nor a default show as
    ``{{<TYPE>_PLACEHOLDER}}``. Values that fail their type check are shown
    in their raw string form.

    Raises:
        TypeError: If content is not a str.
    """
    require_text(content)
    values = values or {}

    replacements: dict[str, str] = {}
    for spec in specs:
        value = effective_value(spec, values)
        if is_blank(value):
            replacements[spec.name] = f"{{{{{spec.variable_type.value.upper()}_PLACEHOLDER}}}}"
            continue

        handler = get_handler(spec.variable_type)
        if handler.validate(value, spec):
            replacements[spec.name] = stringify(value)
        else:
            replacements[spec.name] = handler.format(value, date_format)

    return _substitute(content, replacements)
