"""
LLM Client for the reflection analysis call.

This module provides a clean interface to the hosted model that turns
reflections into discoveries. It handles:
- API client initialization for the configured provider
- A single JSON-mode request (no retries, no fallback)
- Mapping provider failures onto application errors
"""
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from groq import Groq, RateLimitError

from knowyourself.core.config import get_settings
from knowyourself.core.exceptions import LLMError, LLMQuotaError, LLMEmptyResponseError
from knowyourself.core.logging_config import get_logger

logger = get_logger(__name__)

SUPPORTED_PROVIDERS = ("google", "groq")


class LLMClient:
    """
    Client for Google Gemini or Groq, chosen by LLM_PROVIDER.

    Example:
        >>> client = LLMClient()
        >>> raw = client.generate_json('Return ["a", "b"]', system_prompt="Respond with JSON only")
        >>> raw
        '["a", "b"]'
    """

    def __init__(self, provider: Optional[str] = None):
        """
        Initialize the client for one provider.

        Args:
            provider: 'google' or 'groq'. Defaults to settings.llm_provider.
        """
        self.settings = get_settings()
        self.provider = (provider or self.settings.llm_provider).lower()

        if self.provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported LLM provider: {self.provider}. "
                f"Must be one of: {SUPPORTED_PROVIDERS}"
            )

        self.temperature = self.settings.llm_temperature
        self.max_tokens = self.settings.llm_max_tokens

        if self.provider == "google":
            if not self.settings.google_api_key:
                logger.warning("GOOGLE_API_KEY is not set; analysis requests will fail")
            genai.configure(api_key=self.settings.google_api_key)
            self.model = self.settings.llm_model_analysis
        else:
            if not self.settings.groq_api_key:
                logger.warning("GROQ_API_KEY is not set; analysis requests will fail")
            self.groq_client = Groq(api_key=self.settings.groq_api_key)
            self.model = self.settings.llm_model_groq

        logger.info(f"LLM Client initialized: provider={self.provider}, model={self.model}")

    def generate_json(self, user_message: str, system_prompt: str) -> str:
        """
        Send one request asking for a JSON array of strings.

        Returns:
            The raw response text (not parsed)

        Raises:
            LLMEmptyResponseError: If the model returned no text
            LLMQuotaError: If the provider reported a rate-limit or quota condition
            LLMError: For any other provider failure
        """
        try:
            if self.provider == "google":
                text = self._generate_google(user_message, system_prompt)
            else:
                text = self._generate_groq(user_message, system_prompt)
        except Exception as e:
            raise self._classify_error(e) from e

        if not text or not text.strip():
            logger.error(f"Empty response from {self.provider}/{self.model}")
            raise LLMEmptyResponseError()

        logger.debug(f"LLM response received: provider={self.provider}, length={len(text)}")
        return text

    def _generate_google(self, user_message: str, system_prompt: str) -> str:
        """Execute request using Google Gemini in JSON mode."""
        model_instance = genai.GenerativeModel(
            model_name=self.model,
            system_instruction=system_prompt
        )

        generation_config = genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=list[str],
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
        )

        response = model_instance.generate_content(
            user_message,
            generation_config=generation_config
        )

        # The quick accessor raises when the candidate was blocked or empty
        try:
            return response.text
        except ValueError:
            feedback = getattr(response, "prompt_feedback", None)
            logger.warning(f"Gemini returned no text: feedback={feedback}")
            return ""

    def _generate_groq(self, user_message: str, system_prompt: str) -> str:
        """Execute request using Groq."""
        response = self.groq_client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _classify_error(self, error: Exception) -> LLMError:
        """Map a provider exception onto the application's LLM errors."""
        quota_types = (
            RateLimitError,
            google_exceptions.ResourceExhausted,
            google_exceptions.TooManyRequests,
        )
        error_msg = str(error).lower()
        is_rate_limit = (
            isinstance(error, quota_types)
            or getattr(error, "status_code", None) == 429
            or "quota" in error_msg
            or "rate limit" in error_msg
        )

        if is_rate_limit:
            logger.warning(f"Provider rate limited ({self.provider}/{self.model}): {error}")
            return LLMQuotaError(details=type(error).__name__)

        logger.error(f"Provider failed ({self.provider}/{self.model}): {error}")
        return LLMError(details=type(error).__name__)
