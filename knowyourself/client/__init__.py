"""
Client module - talking to the journal API from Python.

- api_client.py : requests-based wrapper over every endpoint
- autosave.py   : debounced autosave controller for editable fields
"""
from knowyourself.client.api_client import ApiError, JournalClient
from knowyourself.client.autosave import (
    AutosaveController,
    SaveState,
    final_learning_autosave,
    reflection_autosave,
)

__all__ = [
    "ApiError",
    "JournalClient",
    "AutosaveController",
    "SaveState",
    "final_learning_autosave",
    "reflection_autosave",
]
