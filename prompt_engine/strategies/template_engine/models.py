"""Template engine domain models.

Pydantic models for templates, variable declarations and the structured
results returned by validation, rendering and extraction.
"""

import re
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from prompt_engine.strategies.template_engine.variable_types import VariableType, get_handler

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class VariableSpec(BaseModel):
    """Declared metadata for one template variable."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Identifier used inside {{ }} placeholders")
    variable_type: VariableType = Field(default=VariableType.TEXT, description="Declared value type")
    required: bool = Field(default=False, description="Whether a value must be supplied")
    default_value: str | None = Field(default=None, description="Type-compatible default")
    options: list[str] | None = Field(default=None, description="Allowed values for dropdowns")
    min_value: float | None = Field(default=None, description="Inclusive lower bound for numbers")
    max_value: float | None = Field(default=None, description="Inclusive upper bound for numbers")
    order: int = Field(default=0, description="Display order index")
    description: str | None = Field(default=None, description="Help text shown to the user")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the name is a legal identifier."""
        if not IDENTIFIER_PATTERN.match(v):
            raise ValueError(
                f"Invalid variable name '{v}'. Use only letters, numbers, and underscores, "
                "and do not start with a number."
            )
        return v

    @field_validator("default_value")
    @classmethod
    def normalize_default(cls, v: str | None) -> str | None:
        """Treat an empty default as no default."""
        return v or None

    @model_validator(mode="after")
    def check_constraints(self) -> "VariableSpec":
        """Enforce per-type declaration invariants."""
        if self.variable_type == VariableType.DROPDOWN and not self.options:
            raise ValueError(f"Dropdown variable '{self.name}' must have options")

        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            raise ValueError(f"Variable '{self.name}' has invalid range")

        if self.default_value is not None:
            error = get_handler(self.variable_type).validate(self.default_value, self)
            if error:
                raise ValueError(f"Default value for '{self.name}' is invalid: {error}")

        return self


class Template(BaseModel):
    """Reusable prompt text with its declared variables.

    The variable list order defines display precedence; substitution follows
    placeholder positions in the content.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    content: str
    title: str | None = None
    description: str | None = None
    variables: list[VariableSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_names(self) -> "Template":
        """Variable names must be unique within a template."""
        seen: set[str] = set()
        for spec in self.variables:
            if spec.name in seen:
                raise ValueError(f"Duplicate variable name: {spec.name}")
            seen.add(spec.name)
        return self

    def declared_names(self) -> list[str]:
        """Names of all declared variables, in declaration order."""
        return [spec.name for spec in self.variables]

    def sorted_variables(self) -> list[VariableSpec]:
        """Variables sorted by display order (stable for equal indices)."""
        return sorted(self.variables, key=lambda spec: spec.order)


class TemplateValidationResult(BaseModel):
    """Outcome of template syntax validation."""

    valid: bool
    errors: list[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Outcome of validating a value map against variable specs."""

    valid: bool
    missing_required: list[str] = Field(default_factory=list)
    invalid_types: dict[str, str] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)


class RenderResult(BaseModel):
    """Rendered text and the validation it was gated on.

    ``result`` is the original content whenever ``validation.valid`` is False.
    """

    result: str
    validation: ValidationResult


class ExtractionResult(BaseModel):
    """A prompt rewritten into template form by heuristic extraction."""

    templated_content: str
    detected_variables: list[str] = Field(default_factory=list)


class InstantiationResult(BaseModel):
    """A concrete prompt produced from a stored template."""

    template_id: uuid.UUID
    title: str
    content: str
    validation: ValidationResult
