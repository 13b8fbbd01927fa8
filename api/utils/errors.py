# api/utils/errors.py
"""
Standardized API error responses.

All errors follow the format:
    {"result": "error", "error": "message or error_code", "detail": "optional"}

Resolver failures carry their message ("No Results Found") in "error".
Request validation failures use snake_case codes ("query_required").
"""

from flask import jsonify
from typing import Optional


# -----------------------------------------------------------------------------
# Standard HTTP Error Responses
# -----------------------------------------------------------------------------

def error_response(
    code: str,
    status: int = 400,
    detail: Optional[str] = None,
    **extra
):
    """
    Create a standardized error response.

    Args:
        code: Error code or resolver message
        status: HTTP status code
        detail: Human-readable explanation (optional)
        **extra: Additional fields to include in response

    Returns:
        Tuple of (jsonify response, status code)
    """
    payload = {"result": "error", "error": code}
    if detail:
        payload["detail"] = detail
    payload.update(extra)
    return jsonify(payload), status


# Not Found (404)
def no_match(message: str):
    """Query did not resolve to a passage."""
    return error_response(message, 404)


# Validation (400)
def missing_field(field: str):
    """Required field is missing."""
    return error_response(f"{field}_required", 400, f"Missing required field: {field}")


# Server Error (500)
def server_error(code: str = "internal_error", detail: str = None):
    """Internal server error."""
    return error_response(code, 500, detail)
