"""
UserCRUD - Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the error cases a request can hit.
How:   Each exception carries a user-facing message and an optional context
       dict. The handlers registered in main.py turn them into plain-text
       HTTP responses with the matching status code.
Who:   Raised by the record store, the view renderer and the route handlers.

Exception Hierarchy:
    UserCRUDError (base)
    ├── ValidationError       → 400 Bad Request
    ├── NotFoundError         → 404 Not Found
    ├── StoreError            → 500 Internal Server Error
    └── TemplateRenderError   → 500 Internal Server Error

Every route goes through the same mapping, so a failing request always gets
a response.
"""

from typing import Any, Dict, List, Optional


class UserCRUDError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged, never returned to the client)
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


class ValidationError(UserCRUDError):
    """
    Raised when a submitted form or JSON body fails the request contract.

    When:    A required field is absent or empty, the body is not a mapping,
             or a record id is not a valid identifier.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Missing required fields.",
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(UserCRUDError):
    """
    Raised when an update or delete matched no record.

    HTTP:    404 Not Found

    The store reports a matched/deleted count of zero; the route converts that
    count into this exception so the status mapping stays in one place.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Record not found.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(UserCRUDError):
    """
    Raised when a MongoDB operation fails.

    When:    Connection refused or lost, server selection timeout, write errors.
    HTTP:    500 Internal Server Error

    The response body is always generic. The driver error is kept in
    `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TemplateRenderError(UserCRUDError):
    """
    Raised when a view cannot be rendered.

    When:    The template file is missing, has a syntax error, or uses a
             variable the context does not provide.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        template_name: str,
        message: str = "Template could not be rendered.",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["template"] = template_name
        super().__init__(message=message, context=ctx)
        self.template_name = template_name
