"""
Business Logic Services
"""
from .analyzer import TicketAnalyzer
from .azure_openai import AzureOpenAISummarizer
from .kix import KixClient

__all__ = [
    "TicketAnalyzer",
    "AzureOpenAISummarizer",
    "KixClient",
]
