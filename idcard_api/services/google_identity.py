# idcard_api/services/google_identity.py
"""Google ID token verification."""
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from starlette.concurrency import run_in_threadpool

from ..core.exceptions import ErrorCode, ServiceError

logger = logging.getLogger(__name__)


class GoogleIdentityVerifier:
    def __init__(self, client_id: Optional[str]):
        self.client_id = client_id
        self._transport = google_requests.Request()

    async def verify(self, token: str) -> Dict[str, Any]:
        """Return the token's claims, checked against our OAuth client id."""
        if not self.client_id:
            logger.error("google_client_id is not configured")
            raise ServiceError(ErrorCode.CONFIGURATION_ERROR, "Google authentication is not configured")

        try:
            # Fetches Google's signing certs over HTTP, so keep it off the event loop
            return await run_in_threadpool(
                id_token.verify_oauth2_token, token, self._transport, self.client_id
            )
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.info(f"Google token rejected: {e}")
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, "Invalid Google token")


def get_google_verifier(request: Request) -> GoogleIdentityVerifier:
    return request.app.state.google_verifier
