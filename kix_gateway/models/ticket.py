"""
Ticket data models

KIX tickets are consumed as the raw JSON dictionaries the API returns; only
the reduced projection sent to Azure OpenAI is defined here.
"""
from typing import Any, Dict

TicketData = Dict[str, Any]

TICKET_FIELDS = ("TicketID", "TicketNumber", "Title", "Created", "Changed")

ARTICLE_FIELDS = (
    "ArticleID",
    "CreateTime",
    "From",
    "To",
    "Subject",
    "Body",
    "CustomerVisible",
    "SenderType",
)


def reduce_article(article: TicketData) -> TicketData:
    """Keep only the article fields relevant for summarization"""
    return {field: article.get(field) for field in ARTICLE_FIELDS}


def reduce_ticket(ticket: TicketData) -> TicketData:
    """
    Reduce a raw KIX ticket to the header fields and simplified articles

    Articles keep their original order; nothing is filtered or sorted.

    Args:
        ticket: Ticket dictionary as returned by GET /tickets/{id}?include=Articles

    Returns:
        Reduced ticket dictionary

    Raises:
        KeyError: If the ticket has no Articles
        TypeError: If Articles is not a list
    """
    articles = ticket["Articles"]
    if not isinstance(articles, list):
        raise TypeError(
            f"Articles must be a list, got {type(articles).__name__}"
        )

    reduced = {field: ticket.get(field) for field in TICKET_FIELDS}
    reduced["Articles"] = [reduce_article(article) for article in articles]
    return reduced
