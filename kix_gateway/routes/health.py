"""
Health check endpoint

Liveness only: reports that the gateway process is serving requests. KIX
and Azure OpenAI are not probed.
"""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    return "OK"
