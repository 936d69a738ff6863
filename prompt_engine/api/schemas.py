"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, Field

# Re-export engine result models used directly as response bodies
from prompt_engine.strategies.template_engine import (
    ExtractionResult,
    InstantiationResult,
    RenderResult,
    Template,
    TemplateValidationResult,
    ValidationResult,
    VariableSpec,
)

__all__ = [
    "ContentRequest",
    "DetectVariablesRequest",
    "DetectVariablesResponse",
    "ErrorResponse",
    "ExtractRequest",
    "ExtractionResult",
    "InstantiateRequest",
    "InstantiationResult",
    "PreviewResponse",
    "RenderRequest",
    "RenderResult",
    "ScanResponse",
    "TemplateValidationResult",
    "ValidationResult",
    "ValuesRequest",
]


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")


# =============================================================================
# Template Schemas
# =============================================================================


class ContentRequest(BaseModel):
    """Request carrying raw template content."""

    content: str = Field(description="Template text with {{name}} placeholders")


class ScanResponse(BaseModel):
    """Variables referenced by a template."""

    variables: list[str]


class ValuesRequest(BaseModel):
    """Request to validate values against declared variables."""

    variables: list[VariableSpec] = Field(default_factory=list)
    values: dict[str, Any] = Field(default_factory=dict)


class RenderRequest(BaseModel):
    """Request to render or preview template content."""

    content: str
    variables: list[VariableSpec] = Field(default_factory=list)
    values: dict[str, Any] = Field(default_factory=dict)


class PreviewResponse(BaseModel):
    """Non-validated preview of rendered content."""

    preview: str


class ExtractRequest(BaseModel):
    """Request to bootstrap a template from a plain prompt."""

    prompt_text: str = Field(description="Prompt written without placeholder syntax")


class DetectVariablesRequest(BaseModel):
    """Request to propose specs for undeclared placeholders."""

    content: str
    existing: list[VariableSpec] = Field(default_factory=list)


class DetectVariablesResponse(BaseModel):
    """Existing specs followed by newly proposed ones."""

    variables: list[VariableSpec]
    added: list[str] = Field(description="Names of the newly proposed variables")


class InstantiateRequest(BaseModel):
    """Request to create a concrete prompt from a template."""

    template: Template
    values: dict[str, Any] = Field(default_factory=dict)
    title: str | None = None
