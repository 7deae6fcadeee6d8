"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- health.py          : Health check endpoints
- auth.py            : Registration, login and profile
- questions.py       : Question catalog
- reflections.py     : Per-question answers
- analysis.py        : AI discoveries
- final_learnings.py : Closing reflection document
- progress.py        : Completion summary
"""
from knowyourself.api.routes.health import router as health_router
from knowyourself.api.routes.auth import router as auth_router
from knowyourself.api.routes.questions import router as questions_router
from knowyourself.api.routes.reflections import router as reflections_router
from knowyourself.api.routes.analysis import router as analysis_router
from knowyourself.api.routes.final_learnings import router as final_learnings_router
from knowyourself.api.routes.progress import router as progress_router

__all__ = [
    "health_router",
    "auth_router",
    "questions_router",
    "reflections_router",
    "analysis_router",
    "final_learnings_router",
    "progress_router",
]
