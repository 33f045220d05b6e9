"""
Author API: Application Package
=================================

A CRUD HTTP API over a single ``authors`` table.

Layers:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← binding, validation, status codes
    ├─────────────────────────────────────┤
    │     Services (AuthorService)        │  ← one storage call per operation
    ├─────────────────────────────────────┤
    │   Mapper / Schemas / Models         │  ← Pydantic DTOs ↔ SQLAlchemy rows
    ├─────────────────────────────────────┤
    │   Repositories (AuthorStore)        │  ← parameterized SQL via AsyncSession
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
