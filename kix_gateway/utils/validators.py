"""
Input validation utilities
"""
import re

_TICKET_ID_PATTERN = re.compile(r"[0-9]+")


def validate_ticket_id(ticket_id: str) -> bool:
    """
    Validate KIX ticket ID format

    Args:
        ticket_id: Ticket ID to validate

    Returns:
        True if the ID consists of ASCII digits only
    """
    return _TICKET_ID_PATTERN.fullmatch(ticket_id) is not None
