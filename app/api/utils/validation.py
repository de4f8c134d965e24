"""
Payload validation helpers.

Routes that must authorize before looking at the body take it as a plain dict
and validate it here once ownership has been established.
"""

from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from app.api.utils.exceptions import ValidationException

T = TypeVar("T", bound=BaseModel)


def format_validation_errors(errors: Iterable[dict]) -> list[dict]:
    """
    Reduce pydantic error entries to ``{field, message, type}`` dicts.

    Args:
        errors: Output of ``ValidationError.errors()``

    Returns:
        list[dict]: JSON serializable error details
    """
    return [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


def validate_payload(schema: type[T], payload: Any, message: str) -> T:
    """
    Validate ``payload`` against ``schema``.

    Args:
        schema: Pydantic model to validate with
        payload: Raw request data
        message (str): Client facing message on failure

    Returns:
        The validated model

    Raises:
        ValidationException: With per-field details when validation fails
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise ValidationException(message, details=format_validation_errors(e.errors())) from e
