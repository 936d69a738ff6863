"""Unit tests for template rendering and previews."""

from datetime import date

import pytest

from prompt_engine.strategies.template_engine import (
    VariableSpec,
    VariableType,
    preview,
    render,
    scan_variables,
)


# =============================================================================
# Render Tests
# =============================================================================


class TestRender:
    """Test suite for render."""

    @pytest.fixture
    def specs(self):
        """Create a representative set of declared variables."""
        return [
            VariableSpec(name="topic", required=True),
            VariableSpec(name="words", variable_type=VariableType.NUMBER, min_value=50, max_value=500),
            VariableSpec(name="due", variable_type=VariableType.DATE),
            VariableSpec(name="formal", variable_type=VariableType.BOOLEAN),
            VariableSpec(
                name="tone",
                variable_type=VariableType.DROPDOWN,
                options=["casual", "academic"],
                default_value="casual",
            ),
        ]

    def test_all_values_supplied(self, specs):
        """Test that every declared placeholder is substituted."""
        content = (
            "Write {{words}} words on {{topic}} by {{due}}. "
            "Formal: {{formal}}. Tone: {{tone}}. Again: {{topic}}."
        )
        values = {
            "topic": "solar power",
            "words": 300,
            "due": "2024-03-15",
            "formal": True,
            "tone": "academic",
        }

        rendered = render(content, specs, values)

        assert rendered.validation.valid is True
        assert rendered.result == (
            "Write 300 words on solar power by 03/15/2024. "
            "Formal: yes. Tone: academic. Again: solar power."
        )

    def test_no_declared_placeholders_remain(self, specs):
        """Test the round trip leaves no declared tokens behind."""
        content = "{{topic}} {{words}} {{due}} {{formal}} {{tone}} {{topic}}"
        values = {"topic": "x", "words": 100, "due": date(2024, 1, 2), "formal": "false"}

        rendered = render(content, specs, values)

        declared = {spec.name for spec in specs}
        assert not declared & set(scan_variables(rendered.result))

    def test_invalid_values_return_original(self, specs):
        """Test that failed validation leaves content unrendered."""
        content = "Write about {{topic}} in {{words}} words."

        rendered = render(content, specs, {"words": 10})

        assert rendered.validation.valid is False
        assert rendered.validation.missing_required == ["topic"]
        assert rendered.validation.invalid_types == {"words": "Must be at least 50"}
        assert rendered.result == content

    def test_default_value_used(self, specs):
        """Test that a missing value falls back to the declared default."""
        rendered = render("Tone: {{tone}}", specs, {"topic": "x"})

        assert rendered.result == "Tone: casual"

    def test_empty_value_uses_default(self, specs):
        """Test that an empty string is treated as not supplied."""
        rendered = render("Tone: {{tone}}", specs, {"topic": "x", "tone": ""})

        assert rendered.result == "Tone: casual"

    def test_optional_without_value_renders_empty(self, specs):
        """Test that optional variables with no value or default become empty."""
        rendered = render("[{{due}}]", specs, {"topic": "x"})

        assert rendered.result == "[]"

    def test_boolean_formatting(self, specs):
        """Test that booleans render as yes/no, including their string forms."""
        assert render("{{formal}}", specs, {"topic": "x", "formal": "false"}).result == "no"
        assert render("{{formal}}", specs, {"topic": "x", "formal": "true"}).result == "yes"
        assert render("{{formal}}", specs, {"topic": "x", "formal": False}).result == "no"

    def test_number_formatting(self, specs):
        """Test that integral floats render without a fractional part."""
        assert render("{{words}}", specs, {"topic": "x", "words": 120.0}).result == "120"
        assert render("{{words}}", specs, {"topic": "x", "words": 120.5}).result == "120.5"
        assert render("{{words}}", specs, {"topic": "x", "words": "99"}).result == "99"

    def test_custom_date_format(self, specs):
        """Test that the date format is configurable."""
        rendered = render("{{due}}", specs, {"topic": "x", "due": "2024-03-15"}, date_format="%Y/%m/%d")

        assert rendered.result == "2024/03/15"

    def test_rendered_date_validates_again(self, specs):
        """Test that a rendered date is accepted when fed back in as a value."""
        rendered = render("{{due}}", specs, {"topic": "x", "due": "2024-03-15"})

        assert rendered.result == "03/15/2024"
        assert render("{{due}}", specs, {"topic": "x", "due": rendered.result}).result == "03/15/2024"

    def test_unknown_placeholders_left_untouched(self, specs):
        """Test that placeholders without a spec survive rendering."""
        rendered = render("{{topic}} and {{mystery}}", specs, {"topic": "x"})

        assert rendered.result == "x and {{mystery}}"

    def test_substituted_values_not_rescanned(self):
        """Test that a value containing a placeholder is inserted literally."""
        specs = [VariableSpec(name="a"), VariableSpec(name="b")]

        rendered = render("{{a}} / {{b}}", specs, {"a": "{{b}}", "b": "B"})

        assert rendered.result == "{{b}} / B"

    def test_none_content_raises(self, specs):
        """Test that a missing content argument is a programmer error."""
        with pytest.raises(TypeError):
            render(None, specs, {})


# =============================================================================
# Preview Tests
# =============================================================================


class TestPreview:
    """Test suite for preview."""

    def test_missing_values_show_type_placeholder(self):
        """Test that unfilled variables are shown by type."""
        specs = [
            VariableSpec(name="topic", required=True),
            VariableSpec(name="due", variable_type=VariableType.DATE),
        ]

        result = preview("{{topic}} by {{due}}", specs, {})

        assert result == "{{TEXT_PLACEHOLDER}} by {{DATE_PLACEHOLDER}}"

    def test_invalid_value_shown_raw(self):
        """Test that preview does not reject invalid values."""
        specs = [VariableSpec(name="count", variable_type=VariableType.NUMBER, max_value=10)]

        assert preview("n={{count}}", specs, {"count": "lots"}) == "n=lots"

    def test_valid_values_formatted(self):
        """Test that valid values are formatted like render."""
        specs = [
            VariableSpec(name="formal", variable_type=VariableType.BOOLEAN, default_value="true"),
        ]

        assert preview("Formal? {{formal}}", specs, {}) == "Formal? yes"
