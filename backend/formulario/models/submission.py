"""
Formulario Backend — Submission Document Model
================================================

What:  Pydantic model for one form post, as stored in MongoDB.
Why:   Gives the two known fields an explicit, optional type while keeping
       the document mapper's pass-through behavior for everything else.
How:   extra="allow" preserves unknown keys (e.g. "nombre"); numbers sent for
       string fields are coerced to strings; anything else non-string fails
       construction and surfaces as a write error.

Document shape (collection "usuarios"):
    {
        "name":  "Ana",              # optional
        "email": "ana@test.com",     # optional
        ...any other posted keys...,
        "_id":   ObjectId("...")     # assigned by MongoDB on insert
    }
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Submission(BaseModel):
    """A person as posted by the form. No field is required."""

    name: Optional[str] = Field(default=None, description="Free-form name")
    email: Optional[str] = Field(default=None, description="Free-form email address")

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    def to_document(self) -> Dict[str, Any]:
        """
        Build the MongoDB document for this submission.

        Only keys present in the request are written: an absent field is not
        stored as null, an explicit null is. Declared fields come before
        extra keys here; the service restores the request's key order.
        """
        return self.model_dump(exclude_unset=True)
