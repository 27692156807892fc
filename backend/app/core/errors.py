"""Error hierarchy for the destinations API.

Every error carries the HTTP status it maps to and renders its own
response body, so the exception handlers in ``app.main`` stay generic.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

_REQUEST_LOCATIONS = ("body", "path", "query", "header", "cookie")


class DestinationAPIError(Exception):
    """Base exception for all destinations API errors."""

    code = "ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code}


class ValidationError(DestinationAPIError):
    """Malformed or out-of-range input, reported per field."""

    code = "VALIDATION_ERROR"
    http_status = 422

    def __init__(self, errors: Mapping[str, List[str]], message: Optional[str] = None):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        if message is None:
            message = _first_message(self.errors) or "The given data was invalid."
        super().__init__(message)

    @classmethod
    def from_pydantic_errors(cls, errors: Iterable[Mapping[str, Any]]) -> "ValidationError":
        """Group pydantic error dicts by field name."""
        grouped: Dict[str, List[str]] = {}
        for error in errors:
            loc = [str(part) for part in error.get("loc", ())]
            # Undecodable JSON is located by character offset, not by field
            if error.get("type") == "json_invalid":
                loc = []
            # Request errors are reported as ("body" | "path" | ..., <field>, ...)
            if loc and loc[0] in _REQUEST_LOCATIONS:
                loc = loc[1:]
            field = ".".join(loc) or "body"
            grouped.setdefault(field, []).append(f"{field}: {error.get('msg', 'invalid value')}")
        return cls(grouped)

    def to_response(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(DestinationAPIError):
    """Missing resource, or one the caller does not own."""

    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, message: str = "Destination not found"):
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        # Deliberately generic: ownership mismatch looks like nonexistence
        return {"success": False}


class AuthenticationError(DestinationAPIError):
    """Missing, malformed or expired credentials."""

    code = "UNAUTHENTICATED"
    http_status = 401

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        return {"message": "Unauthenticated."}


def _first_message(errors: Mapping[str, List[str]]) -> Optional[str]:
    for messages in errors.values():
        if messages:
            return messages[0]
    return None
