"""Built-in riddle catalogue."""

from ..engine.stages import Difficulty
from ..engine.state import Riddle


# All built-in riddles, grouped by difficulty
RIDDLES = {
    Difficulty.EASY: [
        Riddle(
            text="I speak without a mouth and hear without ears. I have nobody, but I come alive with wind. What am I?",
            answer="echo",
        ),
        Riddle(
            text="I have keys but no locks. I have space but no room. You can enter but can't go outside. What am I?",
            answer="keyboard",
        ),
        Riddle(
            text="I can be cracked, made, told, and played. What am I?",
            answer="joke",
        ),
        Riddle(
            text="What has hands but can't clap?",
            answer="clock",
        ),
        Riddle(
            text="What gets wetter the more it dries?",
            answer="towel",
        ),
    ],
    Difficulty.MEDIUM: [
        Riddle(
            text="I have cities, but no houses. I have mountains, but no trees. I have water, but no fish. What am I?",
            answer="map",
        ),
        Riddle(
            text="The more of me you take, the more you leave behind. What am I?",
            answer="footsteps",
        ),
        Riddle(
            text="What has a neck but no head, and wears a cap?",
            answer="bottle",
        ),
        Riddle(
            text="What can travel around the world while staying in a corner?",
            answer="stamp",
        ),
        Riddle(
            text="I have branches, but no fruit, trunk or leaves. What am I?",
            answer="bank",
        ),
    ],
    Difficulty.HARD: [
        Riddle(
            text="I am not alive, but I grow; I don't have lungs, but I need air; I don't have a mouth, but water kills me. What am I?",
            answer="fire",
        ),
        Riddle(
            text="What can fill a room but takes up no space?",
            answer="light",
        ),
        Riddle(
            text="The person who makes it sells it. The person who buys it never uses it. The person who uses it never knows they're using it. What is it?",
            answer="coffin",
        ),
        Riddle(
            text="What is seen in the middle of March and April that can't be seen at the beginning or end of either month?",
            answer="r",
        ),
        Riddle(
            text="I turn once, what is out will not get in. I turn again, what is in will not get out. What am I?",
            answer="key",
        ),
    ],
}


def get_riddles(difficulty: Difficulty) -> list[Riddle]:
    """Get the built-in riddles for a difficulty."""
    if difficulty not in RIDDLES:
        raise ValueError(f"No riddles for difficulty: {difficulty}. Available: {[str(d) for d in RIDDLES]}")
    return RIDDLES[difficulty]

