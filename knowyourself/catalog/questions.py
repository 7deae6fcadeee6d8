"""
Question catalog.

The ten prompts every user works through, in order. The catalog is
compiled into the application and never stored per user; reflections
reference questions by id.
"""
from typing import FrozenSet, Optional, Tuple

from knowyourself.models.journal import Question

QUESTIONS: Tuple[Question, ...] = (
    Question(
        id=1,
        theme="Identity / Roots",
        icon="seedling",
        color="blue",
        prompt=(
            "Describe a background, interest, or talent that has deeply shaped who you are "
            "today. Why is it significant to you?"
        ),
        guide=(
            "Reflect on something that's been with you for a long time — a family tradition, "
            "a personal passion, or an experience that defines your roots. What role does it "
            "play in how you think or behave today?"
        ),
    ),
    Question(
        id=2,
        theme="Challenge / Failure",
        icon="mountain",
        color="orange",
        prompt=(
            "Talk about a meaningful failure or challenge you've faced. What did it teach you "
            "about yourself?"
        ),
        guide=(
            "Don't focus on the mistake itself, but how it changed your thinking. Show "
            "vulnerability, growth, and the lessons you wouldn't have learned otherwise."
        ),
    ),
    Question(
        id=3,
        theme="Questioning Beliefs",
        icon="question-circle",
        color="purple",
        prompt=(
            "Describe a time you seriously questioned a belief or assumption you once held. "
            "What changed inside you?"
        ),
        guide=(
            "Reflect on how you handled discomfort, confrontation, or change. What did the "
            "shift reveal about you?"
        ),
    ),
    Question(
        id=4,
        theme="Experiencing Gratitude",
        icon="heart",
        color="emerald",
        prompt=(
            "Reflect on a person or moment that made you feel truly grateful. How did it shape "
            "your perspective or behavior?"
        ),
        guide=(
            "Go beyond just saying 'thank you.' Explore why that moment/person mattered, what "
            "values it revealed in you, and how it still affects your actions."
        ),
    ),
    Question(
        id=5,
        theme="Personal Growth",
        icon="arrow-trend-up",
        color="teal",
        prompt=(
            "What event or realization made you aware of something deep about yourself? How "
            "did it change how you live or think?"
        ),
        guide=(
            "Talk about a turning point — a time when you discovered a part of yourself you "
            "hadn't fully seen before."
        ),
    ),
    Question(
        id=6,
        theme="Passion / Flow",
        icon="fire",
        color="red",
        prompt=(
            "Describe an activity or topic that completely absorbs you — something you do "
            "where time disappears. What do you think this says about who you are?"
        ),
        guide="What lights you up? What kind of problems do you enjoy solving?",
    ),
    Question(
        id=7,
        theme="Community / Belonging",
        icon="users",
        color="indigo",
        prompt=(
            "Talk about a community or group you feel strongly connected to. What role does it "
            "play in your life?"
        ),
        guide=(
            "How have you contributed or been shaped by others? What does belonging mean to you?"
        ),
    ),
    Question(
        id=8,
        theme="Ethical Courage",
        icon="shield-check",
        color="violet",
        prompt=(
            "Describe a time you stood up for someone or something important, even when it was "
            "difficult. What did you learn about your inner strength?"
        ),
        guide="Reflect on fear, doubt, and what gave you the courage to act anyway.",
    ),
    Question(
        id=9,
        theme="Influences",
        icon="user-group",
        color="cyan",
        prompt=(
            "Who has had a significant influence on how you think or live? What's the most "
            "important lesson they taught you?"
        ),
        guide="Pick someone real. What did their presence reveal about you?",
    ),
    Question(
        id=10,
        theme="Open / Creative Self",
        icon="sparkles",
        color="pink",
        prompt=(
            "What's something unusual, surprising, or creative that really matters to you "
            "— and what does it reveal about your personality?"
        ),
        guide=(
            "Think about a strange obsession, talent, or worldview you have. What makes it "
            "yours, and why do you treasure it?"
        ),
    ),
)

TOTAL_QUESTIONS = len(QUESTIONS)

_BY_ID = {question.id: question for question in QUESTIONS}


def get_question(question_id: int) -> Optional[Question]:
    """Look up a catalog entry by id; None if there is no such question."""
    return _BY_ID.get(question_id)


def question_ids() -> FrozenSet[int]:
    """Ids of every catalog question."""
    return frozenset(_BY_ID)
