import logging

import httpx

from mealremix.domain.aopenai import (
    DEFAULT_MODEL,
    MAX_TOKENS,
    TEMPERATURE,
    Chat,
    openai_client,
)
from mealremix.domain.errors import RemixError
from mealremix.domain.models import Recipe
from mealremix.domain.prompts import REMIX_SYSTEM_PROMPT, RemixPrompt


logger = logging.getLogger(__name__)


class LLMService:
    def __init__(
        self,
        *,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.http_client = openai_client(token) if http_client is None else http_client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def remix(self, recipe: Recipe, theme: str) -> str:
        """Themed remix of `recipe`. Raises `RemixError` on any failure."""
        chat = Chat.from_system_prompt(
            REMIX_SYSTEM_PROMPT,
            client=self.http_client,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.info("Remixing %r with theme %r", recipe.name, theme)
        try:
            text = await chat.chat(str(RemixPrompt(recipe, theme)))
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise RemixError(f"Could not remix {recipe.name!r}: {e!r}") from e

        text = text.strip()
        if not text:
            raise RemixError(f"Empty remix for {recipe.name!r}.")
        return text

    async def close(self) -> None:
        await self.http_client.aclose()
