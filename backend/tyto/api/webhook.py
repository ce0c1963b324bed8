"""
Webhook endpoint - Turn repository push notifications into sync requests.
"""

import hmac
import logging

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def token_matches(token: str | None, secret: str) -> bool:
    if not token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


@router.post("/webhook")
async def webhook(
    request: Request,
    x_codeup_token: str | None = Header(default=None),
):
    """
    Request a sync from the background worker.

    The request is answered immediately; whether the signal was accepted,
    merged into a pending one, or dropped because a sync is running is
    reported in ``sync``.
    """
    if not token_matches(x_codeup_token, request.app.state.settings.webhook_secret):
        logger.warning("Webhook rejected: bad token")
        return JSONResponse(status_code=403, content={"error": "Unauthorized"})

    result = request.app.state.orchestrator.request_sync()
    return {"status": "Webhook received", "sync": result.value}
