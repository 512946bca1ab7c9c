"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
import base64
import binascii

# Inline images are always tagged as JPEG, whatever the source format was.
DATA_URI_PREFIX = "data:image/jpeg;base64,"


def format_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response


def to_data_uri(data: bytes) -> str:
    """Wrap raw image bytes in a data URI."""
    return DATA_URI_PREFIX + base64.b64encode(data).decode("ascii")


def decode_base64_image(value: str) -> Optional[bytes]:
    """
    Decode base64 image text, accepting both bare payloads and data URIs.
    Returns None for empty input; raises ValueError for malformed payloads.
    """
    if not value:
        return None
    payload = value.split(",", 1)[1] if value.startswith("data:") else value
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image: {e}") from e
