"""OpenRouter API client used by the LLM riddle provider."""

import os
from typing import Optional

from openai import AsyncOpenAI
from pydantic import BaseModel

from ..engine.errors import ProviderError


class Message(BaseModel):
    """A chat message."""
    role: str
    content: str


class OpenRouterClient:
    """Async client for OpenRouter's OpenAI-compatible chat endpoint."""

    OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

    def __init__(self, api_key: Optional[str] = None):
        """Initialize the client.

        Args:
            api_key: OpenRouter API key. Falls back to OPENROUTER_API_KEY.
        """
        self.api_key = api_key or os.getenv("OPENROUTER_API_KEY")
        if not self.api_key:
            raise ValueError(
                "OpenRouter API key required. Set OPENROUTER_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self.client = AsyncOpenAI(base_url=self.OPENROUTER_BASE_URL, api_key=self.api_key)

    async def chat(
        self,
        messages: list[Message],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 256,
    ) -> str:
        """Send a chat completion request and return the reply text.

        A missing message content comes back as an empty string; the caller
        decides whether that is usable.

        Raises:
            ProviderError: If the completion carries no choices.
        """
        response = await self.client.chat.completions.create(
            model=model,
            messages=[m.model_dump() for m in messages],
            temperature=temperature,
            max_tokens=max_tokens,
        )

        choices = getattr(response, "choices", None)
        if not choices or choices[0].message is None:
            raise ProviderError(f"Model {model} returned no completion")
        return choices[0].message.content or ""

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 256,
    ) -> str:
        """Ask for one reply to a system + user prompt pair."""
        messages = [
            Message(role="system", content=system_prompt),
            Message(role="user", content=user_prompt),
        ]
        return await self.chat(messages, model, temperature, max_tokens)
