"""Placeholder scanning.

Finds ``{{name}}`` references in template content. There is no escape
syntax: a literal ``{{`` in text is indistinguishable from a placeholder.
"""

import re
from typing import Any

from prompt_engine.strategies.template_engine.models import VariableSpec

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+?)\}\}")


def require_text(value: Any, argument: str = "content") -> str:
    """Reject non-string content arguments.

    Raises:
        TypeError: If value is not a str.
    """
    if not isinstance(value, str):
        raise TypeError(f"{argument} must be a str, got {type(value).__name__}")
    return value


def placeholder(name: str) -> str:
    """Placeholder token for a variable name."""
    return f"{{{{{name}}}}}"


def scan_variables(content: str) -> list[str]:
    """Extract unique variable names referenced in content.

    Args:
        content: Template text.

    Returns:
        Variable names in order of first occurrence, without duplicates.
    """
    require_text(content)
    return list(dict.fromkeys(match.group(1) for match in PLACEHOLDER_PATTERN.finditer(content)))


def detect_variable_specs(
    content: str,
    existing: list[VariableSpec] | None = None,
) -> list[VariableSpec]:
    """Propose specs for placeholders that have not been declared yet.

    Each new variable is declared as required text and appended after the
    existing specs, continuing their display order.

    Args:
        content: Template text to scan.
        existing: Specs already declared for the template.

    Returns:
        The existing specs followed by one new spec per undeclared placeholder.
    """
    existing = list(existing or [])
    declared = {spec.name for spec in existing}
    next_order = max((spec.order for spec in existing), default=-1) + 1

    proposed = list(existing)
    for name in scan_variables(content):
        if name in declared:
            continue
        # Scanned names may start with a digit, which specs forbid.
        if name[0].isdigit():
            continue
        proposed.append(
            VariableSpec(
                name=name,
                required=True,
                order=next_order,
                description=f"Auto-detected variable: {name}",
            )
        )
        declared.add(name)
        next_order += 1

    return proposed
