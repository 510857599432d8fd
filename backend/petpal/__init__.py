"""
PetPal Backend — Application Package Initializer
=================================================

What: Marks the `petpal` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes (JSON API + Web Pages)     │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, care actions, filters
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP input into service calls and service results into
    JSON envelopes or rendered templates. Services never read request or
    session state; the acting user is always passed in explicitly.
"""

__version__ = "1.0.0"
