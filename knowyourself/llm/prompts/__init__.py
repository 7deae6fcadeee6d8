"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from knowyourself.llm.prompts.analysis_prompts import (
    REFLECTION_SEPARATOR,
    get_analysis_system_prompt,
    get_analysis_user_prompt,
)

__all__ = [
    "REFLECTION_SEPARATOR",
    "get_analysis_system_prompt",
    "get_analysis_user_prompt",
]
