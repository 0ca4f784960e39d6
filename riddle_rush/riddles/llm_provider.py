"""Riddles and hints generated by an LLM."""

import re

from openai import OpenAIError
from pydantic import BaseModel, ValidationError, field_validator

from ..engine.errors import ProviderError
from ..engine.stages import Difficulty
from ..engine.state import Riddle
from ..llm.openrouter import OpenRouterClient
from ..llm.prompts import HINT_PROMPT, SYSTEM_PROMPT, build_riddle_prompt


class RiddlePayload(BaseModel):
    """Riddle as returned by the model."""
    text: str
    answer: str

    @field_validator("text", "answer")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def to_riddle(self) -> Riddle:
        return Riddle(text=self.text, answer=self.answer.lower())


_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def parse_riddle(response: str) -> Riddle:
    """Extract a riddle from a model response.

    The model is asked for bare JSON but often wraps it in prose or code
    fences, so the first ``{...}`` span is used.

    Raises:
        ProviderError: If no valid riddle object is found.
    """
    match = _JSON_OBJECT.search(response)
    if not match:
        raise ProviderError(f"No riddle found in model response: {response[:80]!r}")
    try:
        return RiddlePayload.model_validate_json(match.group(0)).to_riddle()
    except ValidationError as e:
        raise ProviderError(f"Malformed riddle from model: {e.error_count()} error(s)") from e


class LLMRiddleProvider:
    """Generates riddles and hints through an OpenAI-compatible chat API.

    Implements both the riddle and the hint provider interfaces.
    """

    def __init__(
        self,
        llm_client: OpenRouterClient,
        model: str = "anthropic/claude-sonnet-4",
        memory: int = 20,
    ):
        """Initialize the provider.

        Args:
            llm_client: Client used for completions.
            model: Model identifier.
            memory: How many recent answers to ask the model to avoid.
        """
        self.llm_client = llm_client
        self.model = model
        self.memory = memory
        self.used_answers: list[str] = []

    async def fetch_riddle(self, difficulty: Difficulty) -> Riddle:
        prompt = build_riddle_prompt(difficulty, self.used_answers[-self.memory:])
        try:
            response = await self.llm_client.generate(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=prompt,
                model=self.model,
                temperature=0.9,
                max_tokens=200,
            )
        except OpenAIError as e:
            raise ProviderError(f"Riddle request failed: {e}") from e

        riddle = parse_riddle(response)
        self.used_answers.append(riddle.answer)
        return riddle

    async def fetch_hint(self, riddle_text: str) -> str:
        try:
            response = await self.llm_client.generate(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=HINT_PROMPT.format(riddle=riddle_text),
                model=self.model,
                temperature=0.5,
                max_tokens=60,
            )
        except OpenAIError as e:
            raise ProviderError(f"Hint request failed: {e}") from e

        hint = response.strip().strip('"')
        if not hint:
            raise ProviderError("Model returned an empty hint")
        return hint
