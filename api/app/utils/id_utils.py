"""
Identifier conversion between the external string form and the storage UUID form.
"""
import uuid

from app.core.exceptions import ValidationError


def convert_string_to_id(value: str) -> uuid.UUID:
    """
    Convert an external identifier string to a storage UUID.

    Only the canonical lowercase, hyphenated form is accepted, so that
    convert_id_to_string(convert_string_to_id(value)) == value for every
    value this function accepts.

    Args:
        value: The identifier string

    Returns:
        The storage UUID

    Raises:
        ValidationError: If the value is not a canonical UUID string
    """
    if not isinstance(value, str):
        raise ValidationError(f"Invalid identifier: {value!r}")
    try:
        parsed = uuid.UUID(value)
    except ValueError as e:
        raise ValidationError(f"Invalid identifier: {value!r}") from e
    if str(parsed) != value:
        raise ValidationError(f"Identifier must be a lowercase hyphenated UUID: {value!r}")
    return parsed


def convert_id_to_string(value: uuid.UUID) -> str:
    """Convert a storage UUID to its external string form."""
    return str(value)


def is_valid_id(value: str) -> bool:
    try:
        convert_string_to_id(value)
    except ValidationError:
        return False
    return True
