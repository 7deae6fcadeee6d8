"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Prompt construction
- API calls to Google Gemini or Groq
- Classification of provider failures
"""
from knowyourself.llm.client import LLMClient
from knowyourself.core.exceptions import LLMError, LLMQuotaError, LLMEmptyResponseError

__all__ = [
    "LLMClient",
    "LLMError",
    "LLMQuotaError",
    "LLMEmptyResponseError",
]
