"""Conversion of request validation errors into the error envelope.

Only the first error is reported, with a message a person can act on.
"""

from typing import Any, Sequence

from praytogether.core.errors import INVALID_REQUEST, VALIDATION_FAILED, ErrorResponse

# Errors meaning the body could not be read as the expected JSON object
MALFORMED_BODY_TYPES = frozenset({"json_invalid", "model_attributes_type", "model_type", "dict_type"})


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def is_malformed_body(error: dict[str, Any]) -> bool:
    """Check whether an error means the body itself is unreadable.

    A missing body is reported by FastAPI as ``missing`` at ``("body",)``.
    """
    if error.get("type") in MALFORMED_BODY_TYPES:
        return True
    return error.get("type") == "missing" and tuple(error.get("loc", ())) == ("body",)


def validation_message(error: dict[str, Any]) -> str:
    """Build a user-facing message for one pydantic error.

    Args:
        error: One entry of ``RequestValidationError.errors()``.

    Returns:
        The message to send to the client.
    """
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}
    field = _field_name(error.get("loc", ()))

    if error_type == "missing":
        return "This field is required."
    if error_type == "string_too_short":
        return f"Must be at least {ctx.get('min_length')} characters."
    if error_type == "string_too_long":
        return f"Must be at most {ctx.get('max_length')} characters."
    if error_type == "value_error" and field.endswith("email"):
        return "Invalid email format."
    if error_type == "phone":
        return "Invalid mobile phone number format. (010-XXXX-XXXX)"
    return f"The '{field}' field is invalid."


def to_error_response(errors: Sequence[dict[str, Any]]) -> ErrorResponse:
    """Map validation errors to a single error response.

    Args:
        errors: The errors from a RequestValidationError.

    Returns:
        INVALID_REQUEST for unreadable bodies, otherwise VALIDATION_FAILED
        carrying the message for the first error.
    """
    if not errors:
        return VALIDATION_FAILED

    first = errors[0]
    if is_malformed_body(first):
        return INVALID_REQUEST

    return ErrorResponse(
        status=VALIDATION_FAILED.status,
        code=VALIDATION_FAILED.code,
        message=validation_message(first),
    )
