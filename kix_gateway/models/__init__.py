"""
Data models
"""
from .ticket import TicketData, reduce_ticket, reduce_article, TICKET_FIELDS, ARTICLE_FIELDS
from .schemas import (
    AnalyzeRequest,
    AnalysisParameters,
    MessageResponse,
    ValidationErrorItem,
    ValidationErrorResponse,
    build_validation_errors,
)

__all__ = [
    "TicketData",
    "reduce_ticket",
    "reduce_article",
    "TICKET_FIELDS",
    "ARTICLE_FIELDS",
    "AnalyzeRequest",
    "AnalysisParameters",
    "MessageResponse",
    "ValidationErrorItem",
    "ValidationErrorResponse",
    "build_validation_errors",
]
