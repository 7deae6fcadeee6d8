"""
Request and Response models for the journal API.

These Pydantic models define the contract between client and server:
- Question catalog entries
- Reflections and their upsert payload
- Stored analysis
- Final learnings and their upsert payload
- Progress summary
"""
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from knowyourself.models.common import CamelModel


class Question(CamelModel):
    """One entry of the fixed question catalog."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Question number, 1-based")
    theme: str = Field(..., description="Short theme shown as the question title")
    icon: str = Field(..., description="Icon name used by the client")
    color: str = Field(..., description="Accent color name used by the client")
    prompt: str = Field(..., description="The question itself")
    guide: str = Field(..., description="Guidance on how to approach the question")


class Reflection(CamelModel):
    """A stored answer to one question."""
    id: int
    user_id: str
    question_id: int
    question_text: str
    user_response: Optional[str] = None
    updated_at: datetime


class ReflectionCreate(CamelModel):
    """Request body for POST /api/reflections."""
    question_id: int = Field(
        ...,
        description="Catalog question being answered",
        examples=[2]
    )
    question_text: str = Field(
        ...,
        description="Prompt text shown to the user when answering",
    )
    user_response: Optional[str] = Field(
        default=None,
        description="The answer text; stored exactly as sent",
        examples=["I learned to be patient."]
    )


class Analysis(CamelModel):
    """The user's current set of AI discoveries."""
    id: int
    user_id: str
    self_discoveries: List[str] = Field(default_factory=list)
    analysis_timestamp: datetime


class FinalLearning(CamelModel):
    """The user's closing reflection document."""
    id: int
    user_id: str
    self_written_learnings: Optional[str] = None
    submitted_at: datetime


class FinalLearningCreate(CamelModel):
    """Request body for POST /api/final-learnings."""
    self_written_learnings: str = Field(
        ...,
        description="Free text summarizing what the user learned"
    )


class Progress(CamelModel):
    """How many catalog questions the user has answered."""
    completed: int = Field(..., ge=0)
    total: int = Field(..., ge=1)
    percentage: int = Field(..., ge=0, le=100)
