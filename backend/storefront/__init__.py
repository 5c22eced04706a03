"""
Storefront Backend: Application Package Initializer
====================================================

What: Marks the `storefront` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows the same layered split as the rest of the backend:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Persistence Gateway (Services)   │  ← Parameterized queries
    ├─────────────────────────────────────┤
    │   Row Decoder / Order Writer        │  ← Pure reshaping, no I/O
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    Routes map outcomes (entity, None, DatabaseError) to status codes.
    Everything below the routes is free of HTTP concepts.
"""

__version__ = "1.0.0"
