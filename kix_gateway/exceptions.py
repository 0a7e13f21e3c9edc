"""
Gateway error taxonomy

Errors raised before a ticket is confirmed found carry the HTTP status they
map to. Errors after that point are only ever logged.
"""
from fastapi import status


class GatewayError(Exception):
    """Base class for all gateway errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(GatewayError):
    """Malformed path or body"""

    status_code = status.HTTP_400_BAD_REQUEST


class KixAuthError(GatewayError):
    """Login to the KIX API failed (transport error or missing token)"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Auth. to KIX API failed."):
        super().__init__(message)


class TicketNotFoundError(GatewayError):
    """Ticket missing from the KIX response, or the fetch itself failed"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket with ID {ticket_id} not found.")
        self.ticket_id = ticket_id


class SummaryError(GatewayError):
    """Azure OpenAI request failed"""


class EmptyResponseError(SummaryError):
    """Azure OpenAI returned no message content"""


class PayloadTooLargeError(SummaryError):
    """Serialized ticket exceeds the configured payload bound"""


class WriteBackError(GatewayError):
    """PATCH of the dynamic field failed"""
