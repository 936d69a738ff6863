"""Variable type handlers.

Each declared variable type maps to a handler that knows how to validate a
raw runtime value, format it for rendering, and coerce a stored default
string into its typed form. Adding a new type is a change to this module only.
"""

import enum
import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

if TYPE_CHECKING:
    from prompt_engine.strategies.template_engine.models import VariableSpec


DEFAULT_DATE_FORMAT = "%m/%d/%Y"

_DATE_ADAPTER = TypeAdapter(date)
_DATETIME_ADAPTER = TypeAdapter(datetime)

# Human-written forms tried after ISO parsing fails, month first.
HUMAN_DATE_FORMATS = (
    DEFAULT_DATE_FORMAT,
    "%m/%d/%y",
    "%m-%d-%Y",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


class VariableType(str, enum.Enum):
    """Declared type of a template variable."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    DROPDOWN = "dropdown"


# =============================================================================
# Value Helpers
# =============================================================================


def is_blank(value: Any) -> bool:
    """Return True when a value counts as not supplied."""
    return value is None or (isinstance(value, str) and value == "")


def stringify(value: Any) -> str:
    """String form of a raw value.

    Booleans render as ``true``/``false`` and integral floats drop the
    trailing ``.0`` so ``42.0`` and ``42`` look the same to the user.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_number(value: Any) -> float | None:
    """Coerce a value to a finite float, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return None
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_date(value: Any) -> date | None:
    """Parse a value into a calendar date, or None if it is not one.

    Accepts date and datetime objects, ISO 8601 strings, unix timestamps and
    the month-first forms in ``HUMAN_DATE_FORMATS`` (``03/15/2024``,
    ``March 15, 2024``), which include the default rendered form.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        return _DATE_ADAPTER.validate_python(value)
    except ValidationError:
        pass
    try:
        return _DATETIME_ADAPTER.validate_python(value).date()
    except ValidationError:
        pass
    if not isinstance(value, str):
        return None
    for fmt in HUMAN_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def to_bool(value: Any) -> bool | None:
    """Return the boolean a value denotes, or None if it denotes none."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


# =============================================================================
# Handlers
# =============================================================================


class VariableTypeHandler(ABC):
    """Validation and formatting rules for one variable type."""

    @abstractmethod
    def validate(self, value: Any, spec: "VariableSpec") -> str | None:
        """Check a non-blank value against its VariableSpec.

        Returns:
            A human-readable violation message, or None if the value is valid.
        """

    @abstractmethod
    def format(self, value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        """Format a value for substitution into rendered text."""

    def coerce(self, value: Any) -> Any:
        """Convert a stored default string into its typed form."""
        return stringify(value)


class TextType(VariableTypeHandler):
    def validate(self, value: Any, spec: "VariableSpec") -> str | None:
        return None

    def format(self, value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        return stringify(value)


class NumberType(VariableTypeHandler):
    def validate(self, value: Any, spec: "VariableSpec") -> str | None:
        number = to_number(value)
        if number is None:
            return "Must be a number"
        if spec.min_value is not None and number < spec.min_value:
            return f"Must be at least {stringify(spec.min_value)}"
        if spec.max_value is not None and number > spec.max_value:
            return f"Must be at most {stringify(spec.max_value)}"
        return None

    def format(self, value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        return stringify(value)

    def coerce(self, value: Any) -> Any:
        number = to_number(value)
        if number is None:
            return value
        return int(number) if number.is_integer() else number


class DropdownType(VariableTypeHandler):
    def validate(self, value: Any, spec: "VariableSpec") -> str | None:
        if spec.options and stringify(value) not in spec.options:
            return "Invalid option selected"
        return None

    def format(self, value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        return stringify(value)


class DateType(VariableTypeHandler):
    def validate(self, value: Any, spec: "VariableSpec") -> str | None:
        if to_date(value) is None:
            return "Invalid date format"
        return None

    def format(self, value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        parsed = to_date(value)
        if parsed is None:
            return stringify(value)
        return parsed.strftime(date_format)

    def coerce(self, value: Any) -> Any:
        parsed = to_date(value)
        return value if parsed is None else parsed


class BooleanType(VariableTypeHandler):
    def validate(self, value: Any, spec: "VariableSpec") -> str | None:
        if to_bool(value) is None:
            return "Must be true or false"
        return None

    def format(self, value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        parsed = to_bool(value)
        if parsed is None:
            parsed = bool(value)
        return "yes" if parsed else "no"

    def coerce(self, value: Any) -> Any:
        parsed = to_bool(value)
        return value if parsed is None else parsed


VARIABLE_TYPES: dict[VariableType, VariableTypeHandler] = {
    VariableType.TEXT: TextType(),
    VariableType.NUMBER: NumberType(),
    VariableType.DATE: DateType(),
    VariableType.BOOLEAN: BooleanType(),
    VariableType.DROPDOWN: DropdownType(),
}


def get_handler(variable_type: VariableType | str) -> VariableTypeHandler:
    """Look up the handler for a variable type.

    Raises:
        ValueError: If the type is not a known VariableType.
    """
    return VARIABLE_TYPES[VariableType(variable_type)]


def coerce_default(spec: "VariableSpec") -> Any:
    """Typed form of a spec's default value, used to prefill input forms.

    Returns None when no default is declared.
    """
    if spec.default_value is None:
        return None
    return get_handler(spec.variable_type).coerce(spec.default_value)
