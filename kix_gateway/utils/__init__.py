"""
Utility functions
"""
from kix_gateway.utils.logger import setup_logging, get_logger
from kix_gateway.utils.validators import validate_ticket_id

__all__ = [
    "setup_logging",
    "get_logger",
    "validate_ticket_id",
]
