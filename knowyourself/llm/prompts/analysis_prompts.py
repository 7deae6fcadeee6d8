# Self-reflection analysis prompt

REFLECTION_SEPARATOR = "\n\n---\n\n"

ANALYSIS_SYSTEM_PROMPT = """You are a thoughtful psychologist helping a person understand themselves
through their own written self-reflections.

Rules:
- Base every insight strictly on what the person wrote
- Speak directly to the person ("You ...")
- Be warm but honest; do not flatter
- Do NOT diagnose or mention disorders
- Respond with JSON only"""

ANALYSIS_USER_PROMPT = """Analyze these self-reflections and provide 5-10 key psychological insights:

{reflections}

Return a JSON array of strings. Each insight should start with a bold psychological concept followed by a colon and brief explanation.

Example: ["**Growth Mindset:** You demonstrate resilience...", "**Self-Awareness:** Your reflections show..."]"""


def get_analysis_system_prompt() -> str:
    """System instruction sent with every analysis request."""
    return ANALYSIS_SYSTEM_PROMPT


def get_analysis_user_prompt(response_texts: list) -> str:
    """Embed the user's answers, separated by horizontal rules, in the analysis template."""
    return ANALYSIS_USER_PROMPT.format(
        reflections=REFLECTION_SEPARATOR.join(response_texts)
    )
