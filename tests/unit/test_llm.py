"""Unit tests for the model-backed field analyzer and chat assistant.

The OpenAI client is replaced by a mock so no network calls are made.
"""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from docfill.interfaces.fields import AnalysisParseError, ModelRequestError
from docfill.strategies.fields import FieldType
from docfill.strategies.llm import ChatAssistant, LLMFieldAnalyzer

FORM_TEXT = "Applicant name: ____\nEmail: ____"


def completion(content):
    """Build a minimal chat completion response object."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def mock_client(response=None, error=None):
    """Build a client whose chat completion call returns or raises."""
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        client.chat.completions.create = AsyncMock(return_value=response)
    return client


class TestLLMFieldAnalyzer:
    """Test suite for LLMFieldAnalyzer."""

    @pytest.fixture
    def reply(self):
        """A well-formed analysis reply."""
        return json.dumps(
            {
                "fields": [
                    {
                        "name": "applicant_name",
                        "type": "text",
                        "description": "Applicant's name",
                        "placeholder": "[[APPLICANT_NAME]]",
                        "required": True,
                    },
                    {
                        "name": "email",
                        "type": "email",
                        "description": "Contact email",
                        "placeholder": "[[EMAIL]]",
                        "required": True,
                    },
                ]
            }
        )

    # =========================================================================
    # Analysis Tests
    # =========================================================================

    def test_analyze_returns_fields(self, reply):
        """Test a successful analysis round trip."""
        client = mock_client(completion(reply))
        analyzer = LLMFieldAnalyzer(api_key="test-key", client=client)

        fields = asyncio.run(analyzer.analyze(FORM_TEXT))

        assert [f.name for f in fields] == ["applicant_name", "email"]
        assert fields[1].type == FieldType.EMAIL
        assert all(f.position is None for f in fields)

    def test_request_uses_json_mode_and_settings(self, reply):
        """Test the request parameters sent to the model."""
        client = mock_client(completion(reply))
        analyzer = LLMFieldAnalyzer(
            api_key="test-key", model="test-model", temperature=0.3, client=client
        )

        asyncio.run(analyzer.request_analysis(FORM_TEXT))

        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.3
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0]["role"] == "system"
        assert FORM_TEXT in kwargs["messages"][1]["content"]

    def test_request_analysis_returns_raw_reply(self):
        """Test that the raw reply is returned without parsing."""
        client = mock_client(completion("not json"))
        analyzer = LLMFieldAnalyzer(api_key="test-key", client=client)

        assert asyncio.run(analyzer.request_analysis(FORM_TEXT)) == "not json"

    # =========================================================================
    # Error Tests
    # =========================================================================

    @pytest.mark.parametrize("text", ["", "   \n"])
    def test_empty_document_rejected(self, text):
        """Test that no request is made for empty text."""
        client = mock_client(completion("{}"))
        analyzer = LLMFieldAnalyzer(api_key="test-key", client=client)

        with pytest.raises(ValueError, match="Document text is required"):
            asyncio.run(analyzer.analyze(text))

        client.chat.completions.create.assert_not_awaited()

    def test_client_failure_wrapped(self):
        """Test that transport errors become ModelRequestError."""
        client = mock_client(error=RuntimeError("connection reset"))
        analyzer = LLMFieldAnalyzer(api_key="test-key", client=client)

        with pytest.raises(ModelRequestError, match="connection reset"):
            asyncio.run(analyzer.analyze(FORM_TEXT))

    @pytest.mark.parametrize(
        "response",
        [completion(None), completion(""), SimpleNamespace(choices=[])],
    )
    def test_empty_reply_is_parse_error(self, response):
        """Test that an empty model reply cannot be parsed."""
        analyzer = LLMFieldAnalyzer(api_key="test-key", client=mock_client(response))

        with pytest.raises(AnalysisParseError, match="Empty response"):
            asyncio.run(analyzer.analyze(FORM_TEXT))

    def test_malformed_reply_is_parse_error(self):
        """Test that a non-fields reply is rejected."""
        client = mock_client(completion('{"items": []}'))
        analyzer = LLMFieldAnalyzer(api_key="test-key", client=client)

        with pytest.raises(AnalysisParseError):
            asyncio.run(analyzer.analyze(FORM_TEXT))


class TestChatAssistant:
    """Test suite for ChatAssistant."""

    def test_reply(self):
        """Test a successful chat reply."""
        client = mock_client(completion("  Use [[FULL_NAME]] for the name.  "))
        assistant = ChatAssistant(api_key="test-key", client=client)

        reply = asyncio.run(assistant.reply("Which placeholder is the name?"))

        assert reply == "Use [[FULL_NAME]] for the name."

    def test_context_goes_into_system_prompt(self):
        """Test that extra context reaches the model."""
        client = mock_client(completion("ok"))
        assistant = ChatAssistant(api_key="test-key", model="test-model", client=client)

        asyncio.run(assistant.reply("hello", context="Fields: full_name, email"))

        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        assert "Fields: full_name, email" in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": "hello"}

    def test_blank_message_rejected(self):
        """Test that a blank message is not sent."""
        client = mock_client(completion("ok"))
        assistant = ChatAssistant(api_key="test-key", client=client)

        with pytest.raises(ValueError, match="Message is required"):
            asyncio.run(assistant.reply("   "))

        client.chat.completions.create.assert_not_awaited()

    def test_client_failure_wrapped(self):
        """Test that transport errors become ModelRequestError."""
        client = mock_client(error=TimeoutError("timed out"))
        assistant = ChatAssistant(api_key="test-key", client=client)

        with pytest.raises(ModelRequestError):
            asyncio.run(assistant.reply("hello"))

    def test_empty_reply_rejected(self):
        """Test that an empty reply is a request failure."""
        assistant = ChatAssistant(api_key="test-key", client=mock_client(completion("")))

        with pytest.raises(ModelRequestError, match="Empty response"):
            asyncio.run(assistant.reply("hello"))
