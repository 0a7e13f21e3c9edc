"""
Ticket analysis API routes

POST /azureopenai/tickets/{ticket_id}/analyze fetches the ticket from KIX,
answers 202 as soon as it is found, and summarizes it in the background.
The caller never learns the outcome of summarization or write-back.
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Path, Request, status

from kix_gateway.exceptions import InvalidInputError
from kix_gateway.models.schemas import AnalyzeRequest, MessageResponse, ValidationErrorResponse
from kix_gateway.services.analyzer import TicketAnalyzer
from kix_gateway.utils.logger import get_logger
from kix_gateway.utils.validators import validate_ticket_id

logger = get_logger(__name__)

router = APIRouter(prefix="/azureopenai/tickets", tags=["analyze"])


def ticket_id_param(ticket_id: str = Path(..., description="Numeric KIX ticket ID")) -> str:
    """
    Validate the ticket ID path parameter

    Runs as a dependency, so an invalid ID is rejected before the body is
    validated and before any KIX call.
    """
    if not validate_ticket_id(ticket_id):
        raise InvalidInputError("Invalid ticketId format. It should be a number.")
    return ticket_id


def get_analyzer(request: Request) -> TicketAnalyzer:
    """Analyzer built by the application factory"""
    return request.app.state.analyzer


@router.post(
    "/{ticket_id}/analyze",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MessageResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Invalid ticket ID or body"},
        404: {"model": MessageResponse, "description": "Ticket not found"},
        500: {"model": MessageResponse, "description": "KIX authentication failed"},
    }
)
async def analyze_ticket(
    background_tasks: BackgroundTasks,
    ticket_id: str = Depends(ticket_id_param),
    body: Optional[AnalyzeRequest] = Body(None),
    analyzer: TicketAnalyzer = Depends(get_analyzer)
):
    """
    Analyze a ticket and write an AI summary into one of its dynamic fields

    Request Body (all optional):
    - dynamic_field: dynamic field to update
    - ai_prompt: system prompt for the summary
    - reduce_metadata: reduce ticket metadata before summarization
    - ai_temperature: sampling temperature
    """
    params = analyzer.resolve_parameters(body)
    token, ticket = await analyzer.accept(ticket_id)

    background_tasks.add_task(analyzer.complete, token, ticket_id, ticket, params)
    logger.info(
        f"Ticket {ticket_id} accepted (field={params.dynamic_field}, "
        f"reduce_metadata={params.reduce_metadata}, temperature={params.temperature})"
    )
    return MessageResponse(message="Ticket found, processing...")
