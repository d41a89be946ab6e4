"""Model-backed field analyzer.

Sends extracted document text to an OpenAI-compatible chat model and turns
its JSON reply into field descriptors.
"""

import logging

from openai import AsyncOpenAI

from docfill.interfaces.fields import AnalysisParseError, BaseFieldAnalyzer, ModelRequestError
from docfill.strategies.fields.analysis_parser import parse_analysis_response
from docfill.strategies.fields.models import FieldDescriptor
from docfill.strategies.llm.prompts import FIELD_ANALYSIS_PROMPT, FIELD_ANALYSIS_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class LLMFieldAnalyzer(BaseFieldAnalyzer):
    """Identifies fillable fields by asking a chat model.

    The model's reply is only trusted after it parses as a fields document;
    see :func:`parse_analysis_response`.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str = "gpt-4o",
        temperature: float = 0.1,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            api_key: OpenAI/OpenRouter API key.
            base_url: API base URL; None uses the OpenAI default.
            model: Model name to use for analysis.
            temperature: Sampling temperature.
            timeout: Per-request timeout in seconds.
            client: Preconfigured client, mainly for tests.
        """
        self._model = model
        self._temperature = temperature
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
        )

        logger.info(f"LLMFieldAnalyzer initialized: model={model}")

    def build_messages(self, document_text: str) -> list[dict[str, str]]:
        """Build the chat messages for an analysis request."""
        return [
            {"role": "system", "content": FIELD_ANALYSIS_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": FIELD_ANALYSIS_PROMPT.format(document_text=document_text),
            },
        ]

    async def request_analysis(self, document_text: str) -> str:
        """Send the analysis request and return the raw reply text.

        Raises:
            ValueError: If ``document_text`` is empty.
            ModelRequestError: If the model call fails.
            AnalysisParseError: If the model returns no content.
        """
        if not document_text or not document_text.strip():
            raise ValueError("Document text is required")

        logger.info(f"Requesting field analysis for {len(document_text)} characters")

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=self.build_messages(document_text),
                response_format={"type": "json_object"},
                temperature=self._temperature,
            )
        except Exception as e:
            logger.error(f"Field analysis request failed: {e}")
            raise ModelRequestError(f"Field analysis request failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise AnalysisParseError("Empty response from model")

        content = response.choices[0].message.content
        logger.info(f"Analysis reply received: {len(content)} chars")
        return content

    async def analyze(self, document_text: str) -> list[FieldDescriptor]:
        """Identify fillable fields in ``document_text``.

        Returns:
            Descriptors without positions, in the order the model listed them.

        Raises:
            ValueError: If ``document_text`` is empty.
            ModelRequestError: If the model call fails.
            AnalysisParseError: If the reply is not a valid fields document.
        """
        content = await self.request_analysis(document_text)
        fields = parse_analysis_response(content)
        logger.info(f"Field analysis complete: {len(fields)} fields")
        return fields
