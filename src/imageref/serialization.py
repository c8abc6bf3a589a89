"""String and JSON serialization for image references.

An image reference always serializes as a bare JSON string holding its
canonical form, never as an object.
"""

import json
from typing import TypeVar

from pydantic_core import core_schema

from .errors import ImageReferenceDecodeError
from .reference import ImageReference

R = TypeVar("R", bound=ImageReference)


def parse_as(image: str, expected: type[R] = ImageReference) -> R:
    """Parse ``image`` and require it to be an ``expected`` variant.

    Raises:
        ImageReferenceDecodeError: If parsing fails or yields another variant
    """
    result = ImageReference.parse(image)
    if not result.ok:
        errors = result.error.errors
        raise ImageReferenceDecodeError(errors[0] if errors else str(result.error))

    if not isinstance(result.value, expected):
        raise ImageReferenceDecodeError(
            f"'{image}' is a {type(result.value).__name__}, expected {expected.__name__}"
        )
    return result.value


def encode_image_reference(image: ImageReference) -> str:
    """Encode as a JSON string literal."""
    return json.dumps(str(image))


def decode_image_reference(data: str | bytes, expected: type[R] = ImageReference) -> R | None:
    """Decode a JSON document holding a single image reference string.

    Args:
        data: JSON text, e.g. ``'"Canonical:UbuntuServer:18.04-LTS:latest"'``
        expected: Variant the string must parse to

    Returns:
        The decoded reference, or None for JSON ``null``

    Raises:
        ImageReferenceDecodeError: On malformed JSON, a non-string value,
            an unparseable image, or a variant mismatch
    """
    try:
        value = json.loads(data)
    except json.JSONDecodeError as e:
        raise ImageReferenceDecodeError(f"Invalid JSON: {e}") from e

    if value is None:
        return None
    if not isinstance(value, str):
        raise ImageReferenceDecodeError(
            f"Expected a JSON string for {expected.__name__}, got {type(value).__name__}"
        )
    return parse_as(value, expected)


def pydantic_core_schema(expected: type[ImageReference]) -> core_schema.CoreSchema:
    """Core schema letting image references be used as pydantic field types.

    Accepts an instance of ``expected`` or a string that parses to one, and
    serializes to the canonical string in both python and JSON modes.
    """

    def validate(value):
        if isinstance(value, expected):
            return value
        if isinstance(value, str):
            return parse_as(value, expected)
        raise ValueError(
            f"Expected {expected.__name__} or string, got {type(value).__name__}"
        )

    return core_schema.no_info_plain_validator_function(
        validate,
        serialization=core_schema.plain_serializer_function_ser_schema(str),
    )
