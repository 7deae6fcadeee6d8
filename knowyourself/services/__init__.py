"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No direct queries (those belong in storage/)
- Orchestrate between LLM and storage layers
"""
from knowyourself.services.analysis_service import AnalysisGenerator, AnalysisService
from knowyourself.services.progress_service import ProgressCalculator, has_response, percentage_of

__all__ = [
    "AnalysisGenerator",
    "AnalysisService",
    "ProgressCalculator",
    "has_response",
    "percentage_of",
]
