"""Template engine API routes.

Stateless endpoints around the template engine: scanning, syntax and value
validation, rendering, previews, extraction and instantiation. Storage of
templates is left to the caller.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from prompt_engine.api.deps import ensure_within_limit, get_engine
from prompt_engine.api.schemas import (
    ContentRequest,
    DetectVariablesRequest,
    DetectVariablesResponse,
    ExtractionResult,
    ExtractRequest,
    InstantiateRequest,
    InstantiationResult,
    PreviewResponse,
    RenderRequest,
    RenderResult,
    ScanResponse,
    TemplateValidationResult,
    ValidationResult,
    ValuesRequest,
)
from prompt_engine.core.config import Settings, get_settings
from prompt_engine.strategies.template_engine import TemplateEngine

logger = logging.getLogger(__name__)

HTTP_UNPROCESSABLE = 422

router = APIRouter(prefix="/templates", tags=["templates"])


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/scan", response_model=ScanResponse, status_code=status.HTTP_200_OK)
async def scan_template(
    request: ContentRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> ScanResponse:
    """List the variables referenced by template content."""
    ensure_within_limit(request.content, settings)
    return ScanResponse(variables=engine.scan_variables(request.content))


@router.post("/validate", response_model=TemplateValidationResult)
async def validate_template(
    request: ContentRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> TemplateValidationResult:
    """Check template syntax and report every problem found."""
    ensure_within_limit(request.content, settings)
    result = engine.validate_template(request.content)
    if not result.valid:
        logger.info(f"Template syntax rejected: {len(result.errors)} errors")
    return result


@router.post("/validate-values", response_model=ValidationResult)
async def validate_values(
    request: ValuesRequest,
    engine: TemplateEngine = Depends(get_engine),
) -> ValidationResult:
    """Validate candidate values against declared variables."""
    return engine.validate_values(request.variables, request.values)


@router.post(
    "/render",
    response_model=RenderResult,
    responses={HTTP_UNPROCESSABLE: {"model": RenderResult}},
)
async def render_template(
    request: RenderRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> RenderResult | JSONResponse:
    """Render content with validated values.

    Returns 422 with the full validation payload when values are rejected.
    """
    ensure_within_limit(request.content, settings)
    result = engine.render(request.content, request.variables, request.values)
    if not result.validation.valid:
        return JSONResponse(
            status_code=HTTP_UNPROCESSABLE,
            content=result.model_dump(mode="json"),
        )
    return result


@router.post("/preview", response_model=PreviewResponse)
async def preview_template(
    request: RenderRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> PreviewResponse:
    """Render a live preview without gating on validation."""
    ensure_within_limit(request.content, settings)
    return PreviewResponse(
        preview=engine.preview(request.content, request.variables, request.values)
    )


@router.post("/extract", response_model=ExtractionResult)
async def extract_template(
    request: ExtractRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> ExtractionResult:
    """Bootstrap a template from a plain prompt."""
    ensure_within_limit(request.prompt_text, settings, field="prompt_text")
    result = engine.extract_candidates(request.prompt_text)
    logger.info(f"Extraction complete: {len(result.detected_variables)} variables detected")
    return result


@router.post("/detect-variables", response_model=DetectVariablesResponse)
async def detect_variables(
    request: DetectVariablesRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> DetectVariablesResponse:
    """Propose specs for placeholders that have not been declared yet."""
    ensure_within_limit(request.content, settings)
    variables = engine.detect_variable_specs(request.content, request.existing)
    existing_names = {spec.name for spec in request.existing}
    added = [spec.name for spec in variables if spec.name not in existing_names]
    return DetectVariablesResponse(variables=variables, added=added)


@router.post(
    "/instantiate",
    response_model=InstantiationResult,
    status_code=status.HTTP_201_CREATED,
    responses={HTTP_UNPROCESSABLE: {"model": InstantiationResult}},
)
async def instantiate_template(
    request: InstantiateRequest,
    engine: TemplateEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> InstantiationResult | JSONResponse:
    """Create a concrete prompt from a template and values."""
    ensure_within_limit(request.template.content, settings)
    result = engine.instantiate(request.template, request.values, title=request.title)
    if not result.validation.valid:
        return JSONResponse(
            status_code=HTTP_UNPROCESSABLE,
            content=result.model_dump(mode="json"),
        )
    return result
