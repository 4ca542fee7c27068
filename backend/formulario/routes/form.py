"""
Formulario Backend — Form Route Handler
=========================================

What:  Handles POST /api/form, the service's only endpoint.
Why:   Entry point for the web form: one post, one stored document.
How:   FastAPI parses the JSON body, the handler delegates to
       SubmissionService, and the stored document is returned.

Request Flow:
    1. Client sends a JSON object (conventionally {name, email})
    2. FastAPI rejects malformed JSON or non-object bodies (default 422)
    3. SubmissionService builds and inserts the document
    4. Return 200 {"status": "OK", "data": <stored document>}
    5. On any failure: FormularioError → 500 {"error": "error al guardar"}
       (formatted by the exception handler in main.py)
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from formulario.database import MongoConnection, get_connection
from formulario.schemas.submission import ErrorResponse, SubmissionResponse
from formulario.services.submission_service import submission_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Form"])


@router.post(
    "/form",
    response_model=SubmissionResponse,
    responses={
        200: {"description": "Submission stored", "model": SubmissionResponse},
        500: {"description": "Submission could not be stored", "model": ErrorResponse},
    },
    summary="Store a form submission",
)
async def submit_form(
    payload: Dict[str, Any] = Body(...),
    connection: MongoConnection = Depends(get_connection),
) -> SubmissionResponse:
    """Store the posted object and echo it back with its generated _id."""
    logger.debug("Received form submission with %d field(s)", len(payload))

    stored = await submission_service.create_submission(
        connection=connection,
        payload=payload,
    )
    return SubmissionResponse(status="OK", data=stored)
