"""
Ticket Analysis Orchestrator

One analyze request runs in two phases:

1. accept(): authenticate and fetch the ticket. Failures here raise and
   become the HTTP response (500 / 404).
2. complete(): reduce, summarize and write back. This runs after the 202
   response has been sent, so failures are only logged.
"""
from typing import Optional, Tuple

from kix_gateway.config import Settings
from kix_gateway.exceptions import SummaryError
from kix_gateway.models.schemas import AnalysisParameters, AnalyzeRequest
from kix_gateway.models.ticket import TicketData, reduce_ticket
from kix_gateway.services.azure_openai import AzureOpenAISummarizer
from kix_gateway.services.kix import KixClient
from kix_gateway.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_reduce_metadata(value) -> bool:
    """False only for boolean False or the string "false" (any case)"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() != "false"
    return True


class TicketAnalyzer:
    """
    Orchestrates KIX and Azure OpenAI for one ticket at a time

    Holds no per-request state; concurrent requests share only the
    clients and the immutable settings.
    """

    def __init__(
        self,
        settings: Settings,
        kix: Optional[KixClient] = None,
        summarizer: Optional[AzureOpenAISummarizer] = None
    ):
        self.default_dynamic_field = settings.kix_summary_field
        self.default_prompt = settings.azure_openai_prompt
        self.default_temperature = settings.azure_openai_temperature
        self.kix = kix or KixClient(settings)
        self.summarizer = summarizer or AzureOpenAISummarizer(settings)

    def resolve_parameters(self, request: Optional[AnalyzeRequest]) -> AnalysisParameters:
        """
        Resolve request overrides against configured defaults

        Empty strings fall back to the defaults like absent values do.
        """
        request = request or AnalyzeRequest()

        temperature = request.ai_temperature
        if temperature is None:
            temperature = self.default_temperature

        return AnalysisParameters(
            dynamic_field=request.dynamic_field or self.default_dynamic_field,
            prompt=request.ai_prompt or self.default_prompt,
            reduce_metadata=resolve_reduce_metadata(request.reduce_metadata),
            temperature=float(temperature)
        )

    async def accept(self, ticket_id: str) -> Tuple[str, TicketData]:
        """
        Authenticate against KIX and fetch the ticket

        Returns:
            (auth token, ticket) - the token is reused for the write-back

        Raises:
            KixAuthError: Login failed
            TicketNotFoundError: Ticket missing or fetch failed
        """
        token = await self.kix.authenticate()
        ticket = await self.kix.get_ticket(token, ticket_id)
        return token, ticket

    async def complete(
        self,
        token: str,
        ticket_id: str,
        ticket: TicketData,
        params: AnalysisParameters
    ) -> Optional[str]:
        """
        Summarize an accepted ticket and write the summary back

        Returns:
            The summary written back, or None if summarization failed
        """
        payload = reduce_ticket(ticket) if params.reduce_metadata else ticket

        try:
            summary = await self.summarizer.summarize(
                ticket_id,
                payload,
                params.prompt,
                params.temperature
            )
        except SummaryError as e:
            logger.error(f"Failed to get Azure OpenAI Response for Ticket with ID {ticket_id}: {e.message}")
            return None

        await self.kix.update_dynamic_field(token, ticket_id, params.dynamic_field, summary)
        return summary
