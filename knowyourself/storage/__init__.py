"""
Storage module - per-user persistence on top of the ORM.

Every store opens one session per operation, so each call is its own
transaction. Stores return Pydantic records, never live ORM rows.
"""
from knowyourself.storage.users import UserStore
from knowyourself.storage.reflections import ReflectionStore
from knowyourself.storage.analysis import AnalysisStore
from knowyourself.storage.final_learnings import FinalLearningStore

__all__ = [
    "UserStore",
    "ReflectionStore",
    "AnalysisStore",
    "FinalLearningStore",
]
