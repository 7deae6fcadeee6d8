"""
Know Yourself - guided self-reflection journaling service.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, security and cross-cutting utilities
- catalog/   : The fixed question set
- database/  : SQLAlchemy connection and ORM models
- storage/   : Per-user stores (users, reflections, analysis, final learnings)
- llm/       : LLM integration and prompt management
- services/  : Business logic (analysis generation, progress)
- models/    : Pydantic models for request/response schemas
- client/    : HTTP client and autosave controller
"""
__version__ = "0.3.0"
