"""Validation utilities for construct property values."""

import re
from typing import Any, Mapping, Optional, Sequence

from .exceptions import InvalidOptionError

# ec2 instance class/size descriptors, e.g. "m7g", "xlarge", "metal-24xl"
DESCRIPTOR_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")

MAX_PORT = 65535

# Top-level keys of an identity policy statement
STATEMENT_KEYS = ("Sid", "Effect", "Action", "NotAction", "Resource", "NotResource", "Condition")

STATEMENT_EFFECTS = ("Allow", "Deny")


def validate_string(field: str, value: Any) -> None:
    """Validate that a field holds a string.

    Args:
        field: Field name
        value: Field value

    Raises:
        InvalidOptionError: If value is not a string
    """
    if not isinstance(value, str):
        raise InvalidOptionError(
            f"{field} must be a string, got {type(value).__name__}",
            fields=[field],
        )


def validate_bool(field: str, value: Any) -> None:
    """Validate that a field holds a boolean.

    Args:
        field: Field name
        value: Field value

    Raises:
        InvalidOptionError: If value is not a bool
    """
    if not isinstance(value, bool):
        raise InvalidOptionError(
            f"{field} must be a boolean, got {type(value).__name__}",
            fields=[field],
        )


def validate_non_negative_int(
    field: str,
    value: Any,
    max_value: Optional[int] = None
) -> None:
    """Validate an integer field.

    Integral floats such as ``40.0``, as read from JSON, are accepted.

    Args:
        field: Field name
        value: Field value
        max_value: Optional inclusive upper bound

    Raises:
        InvalidOptionError: If value is not a non-negative int within bounds
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)

    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOptionError(
            f"{field} must be an integer, got {type(value).__name__}",
            fields=[field],
        )

    if value < 0:
        raise InvalidOptionError(f"{field} cannot be negative", fields=[field])

    if max_value is not None and value > max_value:
        raise InvalidOptionError(
            f"{field} {value} exceeds maximum {max_value}",
            fields=[field],
        )


def validate_non_empty_string(field: str, value: Any) -> None:
    """Validate that a field holds a string with at least one character."""
    validate_string(field, value)
    if not value:
        raise InvalidOptionError(f"{field} cannot be empty", fields=[field])


def validate_port(field: str, value: Any) -> None:
    """Validate a TCP port number."""
    validate_non_negative_int(field, value, max_value=MAX_PORT)


def validate_descriptor(field: str, value: Any) -> None:
    """Validate an instance class or size descriptor.

    Args:
        field: Field name
        value: Descriptor such as "m7g" or "xlarge"

    Raises:
        InvalidOptionError: If descriptor format is invalid
    """
    validate_string(field, value)
    if not DESCRIPTOR_PATTERN.match(value):
        raise InvalidOptionError(
            f"Invalid {field} '{value}'. "
            "Use lowercase letters, digits and hyphens (e.g. 'm7g', 'xlarge')",
            fields=[field],
        )


def validate_tags(field: str, value: Any) -> None:
    """Validate a tag mapping of string keys to string values.

    Args:
        field: Field name
        value: Tag mapping

    Raises:
        InvalidOptionError: If value is not a str -> str mapping
    """
    if not isinstance(value, Mapping):
        raise InvalidOptionError(f"{field} must be a mapping", fields=[field])

    for key, tag_value in value.items():
        if not isinstance(key, str) or not key:
            raise InvalidOptionError(
                f"{field} keys must be non-empty strings",
                fields=[field],
            )
        if not isinstance(tag_value, str):
            raise InvalidOptionError(
                f"{field} value for '{key}' must be a string",
                fields=[field],
            )


def validate_policy_statements(field: str, value: Any) -> None:
    """Validate a sequence of IAM policy statement JSON objects.

    Statements are attached to the instance role, so each one needs an
    effect, an action and a resource, and may not name a principal.

    Args:
        field: Field name
        value: Sequence of policy statement mappings

    Raises:
        InvalidOptionError: If any entry is not a valid identity policy statement
    """
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise InvalidOptionError(f"{field} must be a list", fields=[field])

    for index, statement in enumerate(value):
        prefix = f"{field}[{index}]"
        if not isinstance(statement, Mapping):
            raise InvalidOptionError(
                f"{prefix} must be a policy statement object",
                fields=[field],
            )

        unknown = sorted(str(key) for key in statement if key not in STATEMENT_KEYS)
        if unknown:
            raise InvalidOptionError(
                f"{prefix} has unknown keys: {', '.join(unknown)}. "
                f"Valid keys: {', '.join(STATEMENT_KEYS)}",
                fields=[field],
            )

        if statement.get("Effect") not in STATEMENT_EFFECTS:
            raise InvalidOptionError(
                f"{prefix} Effect must be one of: {', '.join(STATEMENT_EFFECTS)}",
                fields=[field],
            )

        for required in (("Action", "NotAction"), ("Resource", "NotResource")):
            present = [key for key in required if key in statement]
            if len(present) != 1:
                raise InvalidOptionError(
                    f"{prefix} must specify exactly one of {' or '.join(required)}",
                    fields=[field],
                )
            _validate_statement_strings(field, f"{prefix} {present[0]}", statement[present[0]])

        if "Sid" in statement and not isinstance(statement["Sid"], str):
            raise InvalidOptionError(f"{prefix} Sid must be a string", fields=[field])

        if "Condition" in statement and not isinstance(statement["Condition"], Mapping):
            raise InvalidOptionError(f"{prefix} Condition must be an object", fields=[field])


def _validate_statement_strings(field: str, label: str, value: Any) -> None:
    # a single string or a non-empty list of strings
    if isinstance(value, str) and value:
        return
    if (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes))
        and value
        and all(isinstance(item, str) and item for item in value)
    ):
        return
    raise InvalidOptionError(
        f"{label} must be a string or a list of strings",
        fields=[field],
    )
