"""Tests for the LLM client with the provider SDKs mocked out."""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest
from google.api_core import exceptions as google_exceptions

from knowyourself.core.exceptions import LLMEmptyResponseError, LLMError, LLMQuotaError
from knowyourself.llm.client import LLMClient


@pytest.fixture
def mock_genai():
    with patch("knowyourself.llm.client.genai") as genai:
        yield genai


@pytest.fixture
def mock_groq():
    with patch("knowyourself.llm.client.Groq") as groq_cls:
        yield groq_cls.return_value


def set_gemini_text(genai, text):
    genai.GenerativeModel.return_value.generate_content.return_value.text = text


def groq_completion(content):
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


class TestGoogleProvider:
    def test_returns_raw_text(self, mock_genai):
        set_gemini_text(mock_genai, '["**Patience:** You wait well."]')

        raw = LLMClient(provider="google").generate_json("user", system_prompt="system")

        assert raw == '["**Patience:** You wait well."]'
        mock_genai.GenerativeModel.assert_called_once()
        assert mock_genai.GenerativeModel.call_args.kwargs["system_instruction"] == "system"

    def test_requests_json_mode(self, mock_genai):
        set_gemini_text(mock_genai, "[]")

        LLMClient(provider="google").generate_json("user", system_prompt="system")

        config_kwargs = mock_genai.GenerationConfig.call_args.kwargs
        assert config_kwargs["response_mime_type"] == "application/json"

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text_raises(self, mock_genai, text):
        set_gemini_text(mock_genai, text)

        with pytest.raises(LLMEmptyResponseError) as exc_info:
            LLMClient(provider="google").generate_json("user", system_prompt="system")
        assert exc_info.value.message == "Empty response from AI model"
        assert exc_info.value.status_code == 502

    def test_blocked_candidate_is_empty(self, mock_genai):
        response = MagicMock()
        type(response).text = PropertyMock(side_effect=ValueError("no candidates"))
        mock_genai.GenerativeModel.return_value.generate_content.return_value = response

        with pytest.raises(LLMEmptyResponseError):
            LLMClient(provider="google").generate_json("user", system_prompt="system")

    def test_resource_exhausted_is_quota_error(self, mock_genai):
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = (
            google_exceptions.ResourceExhausted("Quota exceeded for model")
        )

        with pytest.raises(LLMQuotaError) as exc_info:
            LLMClient(provider="google").generate_json("user", system_prompt="system")
        assert "high demand" in exc_info.value.message
        assert exc_info.value.status_code == 503

    def test_other_failure_is_generic_error(self, mock_genai):
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("boom")

        with pytest.raises(LLMError) as exc_info:
            LLMClient(provider="google").generate_json("user", system_prompt="system")
        assert not isinstance(exc_info.value, LLMQuotaError)
        assert exc_info.value.message == (
            "AI analysis service is currently unavailable. Please try again later."
        )

    def test_no_retry(self, mock_genai):
        generate = mock_genai.GenerativeModel.return_value.generate_content
        generate.side_effect = RuntimeError("boom")

        with pytest.raises(LLMError):
            LLMClient(provider="google").generate_json("user", system_prompt="system")
        assert generate.call_count == 1


class TestGroqProvider:
    def test_returns_message_content(self, mock_groq):
        mock_groq.chat.completions.create.return_value = groq_completion('["a", "b"]')

        raw = LLMClient(provider="groq").generate_json("user", system_prompt="system")

        assert raw == '["a", "b"]'
        messages = mock_groq.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "system"}
        assert messages[1] == {"role": "user", "content": "user"}

    def test_none_content_is_empty(self, mock_groq):
        mock_groq.chat.completions.create.return_value = groq_completion(None)

        with pytest.raises(LLMEmptyResponseError):
            LLMClient(provider="groq").generate_json("user", system_prompt="system")

    def test_status_429_is_quota_error(self, mock_groq):
        error = Exception("Too Many Requests")
        error.status_code = 429
        mock_groq.chat.completions.create.side_effect = error

        with pytest.raises(LLMQuotaError):
            LLMClient(provider="groq").generate_json("user", system_prompt="system")


class TestClassification:
    @pytest.fixture
    def client(self, mock_genai):
        return LLMClient(provider="google")

    @pytest.mark.parametrize("message", [
        "You exceeded your current quota",
        "Rate limit reached for requests",
    ])
    def test_quota_messages(self, client, message):
        assert isinstance(client._classify_error(Exception(message)), LLMQuotaError)

    def test_digits_429_in_message_are_not_quota(self, client):
        error = RuntimeError("Invalid request id 4291-429-a: model not found")
        classified = client._classify_error(error)
        assert isinstance(classified, LLMError)
        assert not isinstance(classified, LLMQuotaError)

    def test_too_many_requests_type(self, client):
        error = google_exceptions.TooManyRequests("slow down")
        assert isinstance(client._classify_error(error), LLMQuotaError)

    def test_details_carry_exception_type(self, client):
        assert client._classify_error(ConnectionError("refused")).details == "ConnectionError"


def test_unsupported_provider():
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        LLMClient(provider="openai")
