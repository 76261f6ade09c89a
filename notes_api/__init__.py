"""
Notes API — Application Package Initializer
============================================

What:  Marks the `notes_api` directory as a Python package.
Who:   Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Surface)        │  ← routing, auth pipeline, responses
    ├─────────────────────────────────────┤
    │      Services (Orchestration)       │  ← id decoding, timestamps, uploads
    ├──────────────────┬──────────────────┤
    │   Repositories   │ External clients │  ← MongoDB / login + content services
    ├──────────────────┴──────────────────┤
    │          Models & Schemas           │  ← wire and document shapes
    └─────────────────────────────────────┘

    Routes never talk to MongoDB or to the external services directly; they
    go through NoteService, which is assembled per request.
"""

__version__ = "1.0.0"
