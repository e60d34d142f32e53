"""
Configuration Schema System.

This module provides schema declaration and validation for host settings.

Key features:
- Type-safe field definitions with constraints
- Validation of values against schema
- Partial sections merged over defaults
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class ValidationError(SchemaError):
    """Raised when value validation fails."""

    pass


def _matches_type(value: Any, type_: type) -> bool:
    # bool is a subclass of int; keep the two apart
    if type_ is not bool and isinstance(value, bool):
        return False
    if type_ is float and isinstance(value, int):
        return True
    return isinstance(value, type_)


@dataclass(frozen=True)
class ConfigField:
    """
    Represents a configuration field with type and constraints.

    Attributes:
        type_: The expected type of the field value
        default: Default value for the field
        description: Human-readable description
        min: Minimum value (numbers) or minimum length (strings)
        max: Maximum value (numbers) or maximum length (strings)
        choices: List of allowed values (optional)
    """

    type_: type
    default: Any
    description: str = ""
    min: Any = None
    max: Any = None
    choices: tuple[Any, ...] | None = None

    def __post_init__(self):
        """Validate field definition."""
        if not _matches_type(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )

        if (self.min is not None or self.max is not None) and self.type_ not in (
            int,
            float,
            str,
        ):
            raise SchemaError(
                f"min/max constraints only supported for int, float, str. Got {self.type_.__name__}"
            )

        if self.choices is not None and self.default not in self.choices:
            raise SchemaError(
                f"Default value {self.default!r} not in choices {list(self.choices)}"
            )

        # Defaults must satisfy their own constraints
        try:
            self.validate(self.default)
        except ValidationError as e:
            raise SchemaError(f"Invalid default: {e}") from e

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field's constraints.

        Raises:
            ValidationError: If validation fails
        """
        if not _matches_type(value, self.type_):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )

        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Value {value!r} not in allowed choices {list(self.choices)}"
            )

        if self.type_ in (int, float):
            if self.min is not None and value < self.min:
                raise ValidationError(f"Value {value} is less than minimum {self.min}")
            if self.max is not None and value > self.max:
                raise ValidationError(
                    f"Value {value} is greater than maximum {self.max}"
                )

        if self.type_ is str:
            if self.min is not None and len(value) < self.min:
                raise ValidationError(
                    f"String length {len(value)} is less than minimum {self.min}"
                )
            if self.max is not None and len(value) > self.max:
                raise ValidationError(
                    f"String length {len(value)} is greater than maximum {self.max}"
                )


def validate_section(section: dict[str, Any], schema: dict[str, ConfigField]) -> dict[str, Any]:
    """
    Validate a (possibly partial) config section and merge it over defaults.

    Args:
        section: Values read from the config file
        schema: The schema dictionary (field_name -> ConfigField)

    Returns:
        Complete dictionary with every schema field set

    Raises:
        ValidationError: On unknown fields or invalid values
    """
    for key in section:
        if key not in schema:
            raise ValidationError(f"Unknown configuration field: {key}")

    merged = generate_default_config(schema)
    for field_name, value in section.items():
        try:
            schema[field_name].validate(value)
        except ValidationError as e:
            raise ValidationError(f"Field '{field_name}': {e}") from e
        merged[field_name] = value
    return merged


def generate_default_config(schema: dict[str, ConfigField]) -> dict[str, Any]:
    """Generate a default configuration from a schema."""
    return {field_name: field.default for field_name, field in schema.items()}
