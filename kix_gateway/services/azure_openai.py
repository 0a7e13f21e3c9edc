"""
Azure OpenAI Summarizer

Sends a ticket to an Azure OpenAI chat deployment as a two-message exchange
(system prompt + JSON ticket) and returns the generated summary.
"""
import json
from typing import Any, Dict, List

from openai import AsyncAzureOpenAI, OpenAIError

from kix_gateway.config import Settings
from kix_gateway.exceptions import EmptyResponseError, PayloadTooLargeError, SummaryError
from kix_gateway.utils.logger import get_logger

logger = get_logger(__name__)


def serialize_payload(payload: Any) -> str:
    """Compact JSON, non-ASCII kept as is"""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


class AzureOpenAISummarizer:
    """
    Ticket summarization via Azure OpenAI chat completions
    """

    def __init__(self, settings: Settings):
        """
        Initialize the Azure OpenAI client for the configured deployment

        Args:
            settings: Application settings
        """
        self.deployment = settings.azure_openai_deployment_name
        self.max_payload_chars = settings.azure_openai_max_payload_chars
        self.client = AsyncAzureOpenAI(
            azure_endpoint=settings.azure_openai_endpoint,
            azure_deployment=self.deployment,
            api_version=settings.azure_openai_api_version,
            api_key=settings.azure_openai_api_key
        )
        logger.info(f"Initialized AzureOpenAISummarizer ({self.deployment})")

    def build_messages(self, prompt: str, content: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": prompt},
            {"role": "user", "content": content}
        ]

    async def summarize(
        self,
        ticket_id: str,
        payload: Dict[str, Any],
        prompt: str,
        temperature: float
    ) -> str:
        """
        Summarize a ticket

        Args:
            ticket_id: KIX ticket ID (for logging)
            payload: Full or reduced ticket dictionary
            prompt: System prompt
            temperature: Sampling temperature

        Returns:
            Non-empty summary text

        Raises:
            PayloadTooLargeError: If the serialized ticket exceeds the configured bound
            EmptyResponseError: If the first choice carries no content
            SummaryError: If the request itself fails
        """
        content = serialize_payload(payload)
        if self.max_payload_chars is not None and len(content) > self.max_payload_chars:
            raise PayloadTooLargeError(
                f"Ticket {ticket_id} payload has {len(content)} characters, "
                f"limit is {self.max_payload_chars}"
            )

        logger.info(f"Sending Azure OpenAI Request for Ticket {ticket_id}")
        try:
            response = await self.client.chat.completions.create(
                model=self.deployment,
                temperature=temperature,
                messages=self.build_messages(prompt, content)
            )
        except OpenAIError as e:
            raise SummaryError(f"Azure OpenAI request for Ticket {ticket_id} failed: {e}") from e

        summary = None
        if response.choices:
            message = response.choices[0].message
            summary = message.content if message is not None else None

        if not summary:
            raise EmptyResponseError(f"No answer for Ticket {ticket_id} received")

        logger.info(f"Azure OpenAI answer for Ticket {ticket_id} received ({len(summary)} characters)")
        return summary
