"""
Response payload utilities for consistent API response formatting.

Success bodies are the resource itself, optionally merged with a ``message``.
Error bodies are ``{message, error, details?}``.
"""

from typing import Any, Optional, Union
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    status_code: int,
    data: Union[dict, list, None] = None,
    message: Optional[str] = None,
) -> JSONResponse:
    """
    Returns a JSON response for success responses.

    Args:
        status_code (int): HTTP status code
        data (dict | list, optional): Resource payload
        message (str, optional): Message merged into a dict payload

    Returns:
        JSONResponse: Formatted success response
    """
    if isinstance(data, list):
        content: Any = data
    else:
        content = {}
        if message is not None:
            content["message"] = message
        if data:
            content.update(data)

    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(content)
    )


def error_response(
    status_code: int,
    message: str = "An error occurred",
    error: Optional[str] = None,
    details: Optional[Any] = None,
) -> JSONResponse:
    """
    Generate a standardized error response.

    Args:
        status_code (int): HTTP status code
        message (str): Error message
        error (str, optional): Error code
        details (Any, optional): Additional error details

    Returns:
        JSONResponse: Formatted error response
    """
    content = {"message": message}
    if error is not None:
        content["error"] = error
    if details is not None:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(content)
    )
