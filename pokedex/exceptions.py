"""
Pokedex Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a client-facing message and an optional context
       dict. Handlers registered in main.py turn them into `{"error": ...}`
       JSON bodies with the matching HTTP status code.
Who:   Raised by services and middleware; caught by global handlers.

Exception Hierarchy:
    PokedexError (base)
    ├── ValidationError       → 400 Bad Request
    ├── NotFoundError         → 404 Not Found
    ├── PayloadTooLargeError  → 413 Payload Too Large
    ├── FileStorageError      → 500 Internal Server Error (generic message)
    └── DatabaseError         → 500 Internal Server Error (raw message)
"""

from typing import Any, Dict, Optional


class PokedexError(Exception):
    """
    Base exception for all Pokedex application errors.

    Attributes:
        message:  Error description returned to the client
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PokedexError):
    """
    Raised when client input fails validation.

    When:    Malformed data URL, missing image fields, disallowed MIME type,
             undecodable base64, record schema or constraint violations.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PokedexError):
    """
    Raised when no record matches the requested id or name.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Pokemon",
        lookup: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if lookup is not None:
            ctx["lookup"] = lookup
        super().__init__(message=f"{resource} not found", context=ctx)


class PayloadTooLargeError(PokedexError):
    """
    Raised when a request body exceeds the configured size cap.

    HTTP:    413 Payload Too Large
    """

    status_code = 413

    def __init__(
        self,
        max_bytes: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        max_mb = max_bytes / (1024 * 1024)
        ctx = context or {}
        ctx["max_bytes"] = max_bytes
        super().__init__(
            message=f"Request body exceeds the {max_mb:.0f}MB limit",
            context=ctx,
        )
        self.max_bytes = max_bytes


class FileStorageError(PokedexError):
    """
    Raised when writing an uploaded image to disk fails.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error

    The OS error stays in `context` for the server log; the client only
    sees the generic message.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Failed to save image",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PokedexError):
    """
    Raised when a read or delete query fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message is the driver's own error text; API consumers get it
    verbatim in the `error` field.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
