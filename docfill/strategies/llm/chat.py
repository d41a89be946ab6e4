"""Document assistant chat.

Prompt in, text out. The conversation itself is owned by the client.
"""

import logging

from openai import AsyncOpenAI

from docfill.interfaces.fields import ModelRequestError
from docfill.strategies.llm.prompts import CHAT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class ChatAssistant:
    """Answers form-filling questions with a chat model."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str = "gpt-4o",
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._model = model
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
        )

    async def reply(self, message: str, context: str | None = None) -> str:
        """Answer a user message.

        Args:
            message: The user's message.
            context: Extra context appended to the system prompt, e.g. the
                fields identified so far.

        Returns:
            The assistant's reply text.

        Raises:
            ValueError: If ``message`` is empty.
            ModelRequestError: If the model call fails or returns nothing.
        """
        if not message or not message.strip():
            raise ValueError("Message is required")

        system_prompt = CHAT_SYSTEM_PROMPT.format(context=context or "")

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": message},
                ],
            )
        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            raise ModelRequestError(f"Chat request failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ModelRequestError("Empty response from model")

        return response.choices[0].message.content.strip()
