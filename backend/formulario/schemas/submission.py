"""
Formulario Backend — Pydantic Response Schemas
================================================

What:  Models describing the two response bodies of POST /api/form.
Why:   Documents the API contract in one place and keeps the route's return
       type explicit.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class SubmissionResponse(BaseModel):
    """
    What:  Success body. `data` is the stored document with `_id` as a hex string.

    Example:
        {"status": "OK", "data": {"nombre": "Ana", "email": "ana@test.com", "_id": "65f..."}}
    """
    status: str = Field(default="OK")
    data: Dict[str, Any] = Field(description="Persisted submission including its generated _id")


class ErrorResponse(BaseModel):
    """Failure body. The message is fixed regardless of the cause."""
    error: str = Field(description="Generic error message")
