"""
pytest configuration and shared fixtures
"""
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from kix_gateway.config import Settings
from kix_gateway.main import create_app
from kix_gateway.services.analyzer import TicketAnalyzer


@pytest.fixture
def settings() -> Settings:
    """Settings built explicitly, independent of the environment and .env"""
    return Settings(
        _env_file=None,
        kix_api_url="https://kix.example.com/api/v1/",
        kix_api_user_name="ai-gateway",
        kix_api_user_pass="secret",
        azure_openai_endpoint="https://example.openai.azure.com",
        azure_openai_api_key="test-key",
        azure_openai_deployment_name="gpt-4o-mini",
        azure_openai_temperature=0.3,
        azure_openai_prompt="Default prompt",
        kix_summary_field="AI_Summary",
        log_level="INFO"
    )


def make_article(article_id: int, sender_type: str = "external") -> Dict[str, Any]:
    """Raw KIX article with more fields than the reducer keeps"""
    return {
        "ArticleID": article_id,
        "CreateTime": f"2024-05-0{article_id} 10:00:00",
        "From": "customer@example.com" if sender_type == "external" else "agent@example.com",
        "To": "support@example.com",
        "Cc": "",
        "Subject": f"Printer issue #{article_id}",
        "Body": f"Message body {article_id}",
        "CustomerVisible": 1,
        "SenderType": sender_type,
        "ChannelID": 2,
        "Attachments": [],
        "Flags": []
    }


@pytest.fixture
def sample_ticket() -> Dict[str, Any]:
    """Raw KIX ticket with two articles"""
    return {
        "TicketID": 10000,
        "TicketNumber": "2024050110000012",
        "Title": "Printer does not print",
        "Created": "2024-05-01 10:00:00",
        "Changed": "2024-05-02 10:00:00",
        "StateID": 4,
        "PriorityID": 3,
        "QueueID": 1,
        "DynamicFields": [],
        "History": [{"HistoryID": 1, "Name": "NewTicket"}],
        "Articles": [make_article(1, "external"), make_article(2, "internal")]
    }


@pytest.fixture
def mock_kix(sample_ticket):
    """KIX client with all calls mocked (login and fetch succeed)"""
    kix = MagicMock()
    kix.authenticate = AsyncMock(return_value="kix-token")
    kix.get_ticket = AsyncMock(return_value=sample_ticket)
    kix.update_dynamic_field = AsyncMock(return_value=None)
    return kix


@pytest.fixture
def mock_summarizer():
    """Summarizer with the Azure OpenAI call mocked"""
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock(return_value="Request: printer does not print")
    return summarizer


@pytest.fixture
def analyzer(settings, mock_kix, mock_summarizer) -> TicketAnalyzer:
    return TicketAnalyzer(settings, kix=mock_kix, summarizer=mock_summarizer)


@pytest.fixture
def client(settings, analyzer) -> TestClient:
    """Test client for an app wired to the mocked analyzer"""
    return TestClient(create_app(settings, analyzer=analyzer))
