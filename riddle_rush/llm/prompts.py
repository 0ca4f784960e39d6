"""Prompt templates for riddle and hint generation."""

from ..engine.stages import Difficulty


SYSTEM_PROMPT = """
You are the riddle master of Riddle Rush, a fast-paced riddle quiz.
Players get 15 seconds per riddle, so riddles must be short and fair.
Every riddle must have exactly one widely accepted answer, ideally a single word.
"""


DIFFICULTY_GUIDANCE = {
    Difficulty.EASY: "Use a classic, well-known riddle that most children could solve.",
    Difficulty.MEDIUM: "Use a riddle that needs a moment of lateral thinking.",
    Difficulty.HARD: "Use a tricky riddle with misleading wording, but still a fair single answer.",
}


RIDDLE_PROMPT = """
Write one {difficulty} riddle.
{guidance}

Avoid these answers, they were already used: {used}

Respond with ONLY a JSON object of the form:
{{"text": "<the riddle, ending with a question>", "answer": "<the answer, lowercase>"}}
"""


HINT_PROMPT = """
A player is stuck on this riddle:

{riddle}

Give a short hint (one sentence, under 15 words) that nudges them toward the answer
without stating the answer itself. Respond with ONLY the hint.
"""


def build_riddle_prompt(difficulty: Difficulty, used_answers: list[str]) -> str:
    """Fill in the riddle prompt for a difficulty."""
    return RIDDLE_PROMPT.format(
        difficulty=difficulty.value.lower(),
        guidance=DIFFICULTY_GUIDANCE[difficulty],
        used=", ".join(used_answers) if used_answers else "none",
    )
