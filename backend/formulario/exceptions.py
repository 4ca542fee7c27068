"""
Formulario Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the ways a submission can fail.
Why:   The service distinguishes causes internally (for logs) while the API
       answers every one of them with the same fixed message.
How:   Each exception carries a message and optional context dict.
       The handler registered in main.py catches the base class and returns
       a 500 with the public error body.
Who:   Raised by the database layer and the submission service.

Exception Hierarchy:
    FormularioError (base)          → 500 {"error": "error al guardar"}
    ├── StoreUnavailableError       (no usable MongoDB connection)
    └── WriteRejectedError          (document could not be built or inserted)
"""

from typing import Any, Dict, Optional

# The only error text clients ever see
SAVE_ERROR_MESSAGE = "error al guardar"


class FormularioError(Exception):
    """
    Base exception for all Formulario application errors.

    Attributes:
        message:  Internal description (logged, never returned to the client)
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StoreUnavailableError(FormularioError):
    """
    Raised when there is no usable connection to the document store.

    When:    The startup connection failed, was never started, or the driver
             lost the server while inserting.
    """

    def __init__(
        self,
        message: str = "Document store is not available",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class WriteRejectedError(FormularioError):
    """
    Raised when a submission cannot be written.

    When:    The request body could not be turned into a Submission, or the
             store rejected the insert.
    """

    def __init__(
        self,
        message: str = "Submission could not be saved",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
