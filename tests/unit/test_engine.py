"""Unit tests for the TemplateEngine facade and component factory."""

from datetime import date

import pytest

from prompt_engine.core.config import Settings
from prompt_engine.core.factory import ComponentFactory
from prompt_engine.strategies.template_engine import (
    PriorityCandidateExtractor,
    Template,
    TemplateEngine,
    UnionCandidateExtractor,
    VariableSpec,
    VariableType,
)


# =============================================================================
# TemplateEngine Tests
# =============================================================================


class TestTemplateEngine:
    """Test suite for TemplateEngine."""

    @pytest.fixture
    def engine(self):
        """Create an engine with an ISO date format."""
        return TemplateEngine(date_format="%Y-%m-%d")

    @pytest.fixture
    def template(self):
        """Create a stored template."""
        return Template(
            title="Blog outline",
            content="Outline a post about {{topic}} due {{due}}.",
            variables=[
                VariableSpec(name="topic", required=True),
                VariableSpec(name="due", variable_type=VariableType.DATE, default_value="2024-06-01"),
            ],
        )

    def test_default_extractor(self, engine):
        """Test that the priority strategy is used by default."""
        assert isinstance(engine.extractor, PriorityCandidateExtractor)

    def test_render_uses_engine_date_format(self, engine, template):
        """Test that the configured date format is applied."""
        rendered = engine.render(template.content, template.variables, {"topic": "tea"})

        assert rendered.result == "Outline a post about tea due 2024-06-01."

    def test_instantiate(self, engine, template):
        """Test creating a concrete prompt from a template."""
        result = engine.instantiate(template, {"topic": "tea"}, title="Tea post")

        assert result.template_id == template.id
        assert result.title == "Tea post"
        assert result.content == "Outline a post about tea due 2024-06-01."
        assert result.validation.valid is True

    def test_instantiate_default_title(self, engine, template):
        """Test that the title defaults to template title and today's date."""
        result = engine.instantiate(template, {"topic": "tea"})

        assert result.title == f"Blog outline - {date.today():%Y-%m-%d}"

    def test_instantiate_invalid_keeps_content(self, engine, template):
        """Test that failed validation returns the unrendered content."""
        result = engine.instantiate(template, {})

        assert result.validation.valid is False
        assert result.validation.missing_required == ["topic"]
        assert result.content == template.content

    def test_extract_then_validate(self, engine):
        """Test that extracted templates can be validated and rendered."""
        extraction = engine.extract_candidates("Translate [TEXT] into <LANGUAGE>")
        specs = engine.detect_variable_specs(extraction.templated_content)

        assert engine.validate_template(extraction.templated_content).valid is True
        rendered = engine.render(
            extraction.templated_content, specs, {"text": "hello", "language": "French"}
        )
        assert rendered.result == "Translate hello into French"

    def test_preview(self, engine, template):
        """Test live previews through the engine."""
        assert engine.preview(template.content, template.variables, {}) == (
            "Outline a post about {{TEXT_PLACEHOLDER}} due 2024-06-01."
        )


# =============================================================================
# ComponentFactory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    def test_default_extractor(self):
        """Test that the priority extractor is built by default."""
        factory = ComponentFactory(Settings())

        assert isinstance(factory.get_extractor(), PriorityCandidateExtractor)

    def test_union_extractor_from_settings(self):
        """Test strategy selection from configuration."""
        factory = ComponentFactory(Settings(extractor_type="UNION"))

        assert isinstance(factory.get_extractor(), UnionCandidateExtractor)

    def test_unknown_extractor_raises(self):
        """Test that unknown strategies are rejected."""
        factory = ComponentFactory(Settings(extractor_type="llm"))

        with pytest.raises(ValueError, match="Unknown extractor type"):
            factory.get_extractor()

    def test_engine_cached(self):
        """Test that the engine is built once per factory."""
        factory = ComponentFactory(Settings(date_format="%d.%m.%Y"))

        engine = factory.get_engine()

        assert factory.get_engine() is engine
        rendered = engine.render(
            "{{d}}", [VariableSpec(name="d", variable_type=VariableType.DATE)], {"d": "2024-03-15"}
        )
        assert rendered.result == "15.03.2024"

    def test_min_length_from_settings(self):
        """Test that the acronym threshold flows into the extractor."""
        factory = ComponentFactory(Settings(min_candidate_length=2))

        result = factory.get_extractor().extract("Ask the AI")

        assert result.detected_variables == ["ai"]
