"""
Formulario Backend — Submission Service
=========================================

What:  Turns a posted JSON object into a stored MongoDB document.
Why:   Keeps the route handler thin and puts error classification in one place.
How:   Builds a Submission, inserts it through the injected MongoConnection,
       and returns the stored document with its generated _id.
Who:   Called by the POST /api/form route handler.

Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐
    │  Body    │───▶│  Submission  │───▶│  insert_one  │───▶ stored document
    │  (dict)  │    │  (validate)  │    │  (MongoDB)   │
    └──────────┘    └──────────────┘    └──────────────┘

    Any failure becomes a FormularioError:
    - ValidationError (construction)   → WriteRejectedError
    - ConnectionFailure                → StoreUnavailableError
    - other PyMongoError               → WriteRejectedError
    - anything else                    → WriteRejectedError
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError
from pymongo.errors import ConnectionFailure, PyMongoError

from formulario.database import MongoConnection
from formulario.exceptions import (
    FormularioError,
    StoreUnavailableError,
    WriteRejectedError,
)
from formulario.models.submission import Submission

logger = logging.getLogger(__name__)


class SubmissionService:
    """
    Business logic for form submissions.

    Stateless: the connection is passed in on every call, so concurrent
    requests share nothing but the driver's own client.
    """

    async def create_submission(
        self,
        connection: MongoConnection,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Persist one submission and return it as stored.

        Args:
            connection: Process-wide MongoDB handle (injected by FastAPI)
            payload: Parsed JSON object from the request body

        Returns:
            The document as inserted, with "_id" rendered as a hex string.
            Every key of the payload is present, unchanged and in order.

        Raises:
            StoreUnavailableError: No usable connection to MongoDB
            WriteRejectedError: The document could not be built or inserted
        """
        try:
            submission = Submission.model_validate(payload)
            dumped = submission.to_document()
            document = {key: dumped[key] for key in payload}

            collection = await connection.get_collection()
            result = await collection.insert_one(document)

        except FormularioError as e:
            logger.error("Submission not saved: %s | Context: %s", e.message, e.context)
            raise
        except ValidationError as e:
            logger.warning("Submission rejected during construction: %d error(s)", e.error_count())
            raise WriteRejectedError(
                message="Submission could not be built from the request body",
                context={"errors": e.errors(include_url=False, include_input=False)},
            ) from e
        except ConnectionFailure as e:
            logger.error("MongoDB unreachable while inserting submission: %s", str(e))
            raise StoreUnavailableError(
                message="Lost connection to the document store",
                context={"original_error": type(e).__name__},
            ) from e
        except PyMongoError as e:
            logger.error("MongoDB rejected submission insert: %s", str(e))
            raise WriteRejectedError(
                message="Document store rejected the submission",
                context={"original_error": type(e).__name__},
            ) from e
        except Exception as e:
            logger.error("Unexpected error saving submission: %s", str(e), exc_info=True)
            raise WriteRejectedError(
                context={"original_error": type(e).__name__},
            ) from e

        stored = dict(document)
        stored["_id"] = str(result.inserted_id)
        logger.info(
            "Submission %s saved with fields %s",
            stored["_id"],
            [key for key in stored if key != "_id"],
        )
        return stored


# Singleton instance for use in route handlers
submission_service = SubmissionService()
