"""
Catalog module - the fixed set of reflection questions.
"""
from knowyourself.catalog.questions import QUESTIONS, TOTAL_QUESTIONS, get_question, question_ids

__all__ = [
    "QUESTIONS",
    "TOTAL_QUESTIONS",
    "get_question",
    "question_ids",
]
