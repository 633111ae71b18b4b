"""
Precisely Documents: Application Package Initializer
=====================================================

What: Marks the `precisely` directory as a Python package.
Who:  Imported by uvicorn, Alembic and pytest.

Architecture Note:
    Requests travel through three layers, each with one job:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Layer)          │  ← decode, dispatch, envelope
    ├─────────────────────────────────────┤
    │    Services (Validation/Ordering)   │  ← validator, existence checks
    ├─────────────────────────────────────┤
    │   Repositories (Persistence)        │  ← SQL against `documents`
    └─────────────────────────────────────┘

    Errors move upward unchanged. Only the HTTP layer turns an error kind
    into a status code.
"""

__version__ = "1.0.0"
