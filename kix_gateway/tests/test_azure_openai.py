"""
Tests for the Azure OpenAI summarizer
"""
import json

import httpx
import pytest
from openai import APIConnectionError
from unittest.mock import AsyncMock, MagicMock, patch

from kix_gateway.config import Settings
from kix_gateway.exceptions import EmptyResponseError, PayloadTooLargeError, SummaryError
from kix_gateway.services.azure_openai import AzureOpenAISummarizer, serialize_payload


def completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture
def summarizer(settings):
    return AzureOpenAISummarizer(settings)


class TestSummarize:
    """Chat completion request and answer extraction"""

    @pytest.mark.asyncio
    async def test_successful_summary(self, summarizer, sample_ticket):
        with patch.object(
            summarizer.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=completion("Request: printer broken")
        ) as mock_create:
            summary = await summarizer.summarize("10000", sample_ticket, "Summarize", 0.3)

        assert summary == "Request: printer broken"

        kwargs = mock_create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3
        messages = kwargs["messages"]
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == "Summarize"
        assert json.loads(messages[1]["content"]) == sample_ticket

    @pytest.mark.asyncio
    async def test_empty_content(self, summarizer):
        with patch.object(
            summarizer.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=completion("")
        ):
            with pytest.raises(EmptyResponseError, match="No answer for Ticket 1 received"):
                await summarizer.summarize("1", {}, "Summarize", 0.3)

    @pytest.mark.asyncio
    async def test_no_choices(self, summarizer):
        response = MagicMock()
        response.choices = []

        with patch.object(
            summarizer.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=response
        ):
            with pytest.raises(EmptyResponseError):
                await summarizer.summarize("1", {}, "Summarize", 0.3)

    @pytest.mark.asyncio
    async def test_request_failure(self, summarizer):
        error = APIConnectionError(request=httpx.Request("POST", "https://example.openai.azure.com"))

        with patch.object(
            summarizer.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            side_effect=error
        ) as mock_create:
            with pytest.raises(SummaryError):
                await summarizer.summarize("1", {}, "Summarize", 0.3)

        assert mock_create.call_count == 1

    @pytest.mark.asyncio
    async def test_payload_over_limit_not_sent(self, settings, sample_ticket):
        limited = Settings(
            **{**settings.model_dump(), "azure_openai_max_payload_chars": 50},
            _env_file=None
        )
        summarizer = AzureOpenAISummarizer(limited)

        with patch.object(
            summarizer.client.chat.completions, "create", new_callable=AsyncMock
        ) as mock_create:
            with pytest.raises(PayloadTooLargeError):
                await summarizer.summarize("10000", sample_ticket, "Summarize", 0.3)

        mock_create.assert_not_called()


def test_serialize_payload_is_compact_and_keeps_unicode():
    assert serialize_payload({"Title": "Drucker läuft nicht", "Articles": []}) == (
        '{"Title":"Drucker läuft nicht","Articles":[]}'
    )
