"""
Journal API client.

A thin requests-based wrapper over the REST API. Methods return the
decoded JSON (camelCase keys, as served) and raise ApiError for any
failure so callers can show a notification and keep the user's text.
"""
import os
from typing import Any, Dict, List, Optional

import requests

from knowyourself.core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10
ANALYSIS_TIMEOUT = 120


class ApiError(Exception):
    """Raised when a request fails or the server answers with an error status."""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class JournalClient:
    """
    Client for the journal API.

    Example:
        >>> client = JournalClient("http://127.0.0.1:8000")
        >>> client.login("river", "correct horse")
        >>> client.save_reflection(2, "Talk about a meaningful failure...", "I learned to be patient.")
        >>> client.get_progress()
        {'completed': 1, 'total': 10, 'percentage': 10}
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or os.getenv("API_BASE_URL", "http://127.0.0.1:8000")).rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None
    ) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(f"Request timed out: {method} {path}")
            raise ApiError(0, "Request timed out. Please try again.") from e
        except requests.exceptions.ConnectionError as e:
            logger.warning(f"Cannot connect to API: {self.base_url}")
            raise ApiError(0, "Cannot connect to the server.") from e

        if not response.ok:
            raise self._error_from(response)

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_from(response: requests.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = {}

        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or response.reason or "Request failed"
        return ApiError(response.status_code, message, error=body.get("error"))

    # ------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------

    def register(self, username: str, password: str, **profile: Optional[str]) -> Dict[str, Any]:
        """Create an account; the returned token is kept for later calls."""
        body = {"username": username, "password": password, **profile}
        result = self._request("POST", "/api/register", json=body)
        self.token = result["accessToken"]
        return result["user"]

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """Log in; the returned token is kept for later calls."""
        result = self._request("POST", "/api/login", json={"username": username, "password": password})
        self.token = result["accessToken"]
        return result["user"]

    def get_user(self) -> Dict[str, Any]:
        return self._request("GET", "/api/auth/user")

    def update_profile(self, **fields: Optional[str]) -> Dict[str, Any]:
        return self._request("PATCH", "/api/auth/user", json=fields)

    # ------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------

    def list_questions(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/questions")

    def get_question(self, question_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/questions/{question_id}")

    def list_reflections(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/reflections")

    def get_reflection(self, question_id: int) -> Optional[Dict[str, Any]]:
        return self._request("GET", f"/api/reflections/{question_id}")

    def save_reflection(self, question_id: int, question_text: str, user_response: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/reflections",
            json={
                "questionId": question_id,
                "questionText": question_text,
                "userResponse": user_response,
            },
        )

    def get_analysis(self) -> Optional[Dict[str, Any]]:
        return self._request("GET", "/api/analysis")

    def generate_analysis(self) -> Dict[str, Any]:
        """Ask the server to analyze all answered questions (slow: waits on the model)."""
        return self._request("POST", "/api/analysis/generate", timeout=ANALYSIS_TIMEOUT)

    def get_final_learnings(self) -> Optional[Dict[str, Any]]:
        return self._request("GET", "/api/final-learnings")

    def save_final_learnings(self, text: str) -> Dict[str, Any]:
        return self._request("POST", "/api/final-learnings", json={"selfWrittenLearnings": text})

    def get_progress(self) -> Dict[str, Any]:
        return self._request("GET", "/api/progress")
