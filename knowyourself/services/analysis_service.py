"""
Analysis Service - turns a user's reflections into discoveries.

This service handles the complete flow:
1. Load the user's reflections
2. Keep only answered questions (rejecting the request if there are none)
3. Ask the hosted model for 5-10 insights as a JSON array
4. Parse the array
5. Replace the user's stored analysis

Nothing is retried, and a failed generation leaves the stored analysis
untouched.
"""
import json
from typing import List, Optional

from knowyourself.core.exceptions import AnalysisParseError, ValidationError
from knowyourself.core.logging_config import get_logger
from knowyourself.llm.client import LLMClient
from knowyourself.llm.prompts import get_analysis_system_prompt, get_analysis_user_prompt
from knowyourself.models.journal import Analysis
from knowyourself.services.progress_service import has_response
from knowyourself.storage.analysis import AnalysisStore
from knowyourself.storage.reflections import ReflectionStore

logger = get_logger(__name__)


class AnalysisGenerator:
    """
    Produces discovery strings from response texts via the hosted model.

    The LLM client is created on first use so the generator can be built
    without API credentials.
    """

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = LLMClient()
        return self._llm_client

    def generate(self, response_texts: List[str]) -> List[str]:
        """
        Generate discoveries for a set of answers.

        Args:
            response_texts: Non-empty answer texts, in question order

        Returns:
            Discovery strings in the order the model returned them

        Raises:
            LLMError: (and subclasses) when the model call fails
            json.JSONDecodeError: If the model's text is not JSON
            AnalysisParseError: If the JSON is not a list of strings
        """
        if not response_texts:
            raise ValueError("generate() needs at least one response text")

        prompt = get_analysis_user_prompt(response_texts)
        raw = self.llm_client.generate_json(prompt, system_prompt=get_analysis_system_prompt())

        discoveries = json.loads(raw)
        if not isinstance(discoveries, list) or not all(isinstance(d, str) for d in discoveries):
            raise AnalysisParseError(
                f"Expected a JSON array of strings, got {type(discoveries).__name__}"
            )

        logger.info(
            f"Generated {len(discoveries)} discoveries from {len(response_texts)} reflections"
        )
        return discoveries


class AnalysisService:
    """
    Orchestrates generating and storing a user's analysis.

    Example:
        >>> service = AnalysisService()
        >>> analysis = service.generate_for_user("user-1")
        >>> analysis.self_discoveries[0]
        '**Growth Mindset:** You ...'
    """

    def __init__(
        self,
        reflection_store: Optional[ReflectionStore] = None,
        analysis_store: Optional[AnalysisStore] = None,
        generator: Optional[AnalysisGenerator] = None
    ):
        self.reflection_store = reflection_store or ReflectionStore()
        self.analysis_store = analysis_store or AnalysisStore()
        self.generator = generator or AnalysisGenerator()

    def get(self, user_id: str) -> Optional[Analysis]:
        """The user's stored analysis, if any."""
        return self.analysis_store.get(user_id)

    def collect_responses(self, user_id: str) -> List[str]:
        """
        Non-empty answer texts for a user, in question order.

        Raises:
            ValidationError: If the user has no non-empty reflections
        """
        response_texts = [
            reflection.user_response
            for reflection in self.reflection_store.list(user_id)
            if has_response(reflection.user_response)
        ]

        if not response_texts:
            logger.info(f"Analysis rejected for {user_id[:8]}: no answered questions")
            raise ValidationError("No reflections available for analysis")
        return response_texts

    def generate_for_user(self, user_id: str, response_texts: Optional[List[str]] = None) -> Analysis:
        """
        Run the generator over the user's answered questions and store the result.

        Args:
            user_id: Owner of the reflections
            response_texts: Answers already gathered by collect_responses()

        Raises:
            ValidationError: If the user has no non-empty reflections
                (checked before any external call)
        """
        if response_texts is None:
            response_texts = self.collect_responses(user_id)

        logger.info(f"Generating analysis for {user_id[:8]} from {len(response_texts)} reflections")
        discoveries = self.generator.generate(response_texts)

        return self.analysis_store.replace(user_id, discoveries)
