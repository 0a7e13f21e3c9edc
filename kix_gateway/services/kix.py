"""
KIX API Client

Provides the three KIX REST calls the gateway needs:
- Agent login (POST /auth)
- Ticket retrieval with articles (GET /tickets/{id}?include=Articles)
- Dynamic field update (PATCH /tickets/{id})

No retries: every call is attempted once.
"""
from typing import Any, Dict, Optional

import httpx

from kix_gateway.config import Settings
from kix_gateway.exceptions import KixAuthError, TicketNotFoundError, WriteBackError
from kix_gateway.models.ticket import TicketData
from kix_gateway.utils.logger import get_logger

logger = get_logger(__name__)


class KixClient:
    """
    KIX API integration with uniform error mapping
    """

    USER_TYPE = "Agent"

    def __init__(self, settings: Settings):
        self.base_url = settings.kix_api_url
        self.user_name = settings.kix_api_user_name
        self.password = settings.kix_api_user_pass
        self.headers = {
            "Content-Type": "application/json"
        }
        self.timeout = settings.kix_api_timeout

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        token: Optional[str] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make a single HTTP request against the KIX API

        Args:
            method: HTTP method (GET, POST, PATCH)
            endpoint: API endpoint relative to the base URL
            token: KIX auth token, sent as "Authorization: Token <token>"
            **kwargs: Additional arguments for httpx

        Returns:
            Response JSON (empty dict for an empty body)

        Raises:
            httpx.HTTPError: On transport errors and non-2xx responses
            ValueError: If the body is not valid JSON
        """
        url = f"{self.base_url}/{endpoint}"
        headers = dict(self.headers)
        if token:
            headers["Authorization"] = f"Token {token}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.request(
                method=method,
                url=url,
                headers=headers,
                **kwargs
            )
            response.raise_for_status()
            if not response.content:
                return {}
            return response.json()

    async def authenticate(self) -> str:
        """
        Log in as agent and return the auth token

        Returns:
            Non-empty KIX auth token

        Raises:
            KixAuthError: On any request failure or if the response has no token
        """
        payload = {
            "UserLogin": self.user_name,
            "Password": self.password,
            "UserType": self.USER_TYPE
        }

        try:
            data = await self._make_request("POST", "auth", json=payload)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to get KIX Auth Token: {e}")
            raise KixAuthError() from e

        token = data.get("Token") if isinstance(data, dict) else None
        if not token:
            logger.error("Failed to get KIX Auth Token: response contains no token")
            raise KixAuthError()

        logger.debug("KIX Auth Token received")
        return token

    async def get_ticket(self, token: str, ticket_id: str) -> TicketData:
        """
        Get ticket details including its articles

        Args:
            token: KIX auth token
            ticket_id: Numeric KIX ticket ID

        Returns:
            Ticket dictionary

        Raises:
            TicketNotFoundError: On any request failure or if the response has no ticket
        """
        logger.info(f"Fetching ticket {ticket_id}")
        try:
            data = await self._make_request(
                "GET",
                f"tickets/{ticket_id}",
                token=token,
                params={"include": "Articles"}
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to get KIX Ticket with ID {ticket_id}: {e}")
            raise TicketNotFoundError(ticket_id) from e

        ticket = data.get("Ticket") if isinstance(data, dict) else None
        if not ticket:
            logger.warning(f"Failed to get KIX Ticket with ID {ticket_id}: response contains no ticket")
            raise TicketNotFoundError(ticket_id)

        logger.info(f"Ticket {ticket_id} successfully received")
        return ticket

    async def _patch_dynamic_field(
        self,
        token: str,
        ticket_id: str,
        field_name: str,
        value: str
    ) -> None:
        payload = {
            "Ticket": {
                "DynamicFields": [{"Name": field_name, "Value": value}]
            }
        }

        try:
            await self._make_request(
                "PATCH",
                f"tickets/{ticket_id}",
                token=token,
                json=payload
            )
        except httpx.HTTPStatusError as e:
            raise WriteBackError(
                f"KIX responded {e.response.status_code}: {e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise WriteBackError(str(e)) from e

    async def update_dynamic_field(
        self,
        token: str,
        ticket_id: str,
        field_name: str,
        value: str
    ) -> None:
        """
        Set one dynamic field of a ticket

        Fire-and-forget: failures are logged and never raised, since the
        caller's HTTP response has already been sent.

        Args:
            token: KIX auth token
            ticket_id: Numeric KIX ticket ID
            field_name: Dynamic field name
            value: New field value
        """
        logger.info(f"Updating KIX Ticket {ticket_id}, Dynamic Field {field_name}")
        try:
            await self._patch_dynamic_field(token, ticket_id, field_name, value)
        except WriteBackError as e:
            logger.error(
                f"Failed to update Dynamic Field {field_name} of KIX Ticket {ticket_id}: {e.message}"
            )
            return

        logger.info(f"KIX Ticket {ticket_id}, Dynamic Field {field_name} updated")
