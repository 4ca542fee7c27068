"""
Formulario Backend — Application Package Initializer
====================================================

What: Marks the `formulario` directory as a Python package.
Why:  Enables module imports like `from formulario.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is a thin stack of layers around a single form endpoint:

    ┌─────────────────────────────────────┐
    │        Routes (POST /api/form)      │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (SubmissionService)   │  ← Build document, insert, map errors
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Pydantic Submission + responses
    ├─────────────────────────────────────┤
    │  Database (MongoConnection handle)  │  ← One long-lived MongoDB client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
