"""
UserCRUD - Application Package Initializer
===========================================

What: Marks the `usercrud` directory as a Python package.
Who:  Imported by uvicorn (`usercrud.main:app`), pytest, and `python -m usercrud`.

Architecture Note:
    The application is a thin layered web app:

    ┌─────────────────────────────────────┐
    │     Routes (HTML pages + forms)     │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (record store, renderer)  │  ← MongoDB access, Jinja2 rendering
    ├─────────────────────────────────────┤
    │        Schemas (Record types)       │  ← Pydantic request contracts
    ├─────────────────────────────────────┤
    │     Database (client lifecycle)     │  ← AsyncMongoClient, opened once
    └─────────────────────────────────────┘

    Routes receive the record store and the renderer as FastAPI dependencies,
    so every layer can be exercised in tests with a substitute.
"""

__version__ = "1.0.0"
