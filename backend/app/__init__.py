"""
Vidly Backend — Application Package Initializer
================================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (`app.main:app`), Alembic and pytest.

Architecture Note:
    The backend is layered the same way for every entity:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← auth, id checks, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← one store operation per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Entities: Genre, Movie, Customer, User, Rental.
    Movie embeds a Genre snapshot; Rental embeds Customer and Movie snapshots.
"""

__version__ = "1.0.0"
