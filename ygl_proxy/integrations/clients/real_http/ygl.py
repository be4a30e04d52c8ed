"""
YouGotListings HTTP Client.

Purpose:
- POSTs form-encoded requests to the YGL XML/form API
- Surfaces every failure as ``UpstreamError`` so the endpoints render one envelope

Implementation notes:
- One request per call, no retries; the only resilience is the timeout
- Redirects are followed, up to ``max_redirects``
- The raw body is returned; turning XML into data is the normalizer's job

Important:
- Keep this client as the ONLY place where YGL HTTP calls are made.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Union

import httpx

from ygl_proxy.error_handler import UpstreamError
from ygl_proxy.integrations.policy.response_wrappers import upstream_error_details
from ygl_proxy.utils.config_loader import DEFAULT_YGL_BASE_URL

logger = logging.getLogger(__name__)

RENTALS_SEARCH_PATH = "/rentals/search.php"
AGENTS_SEARCH_PATH = "/agents/search.php"
LANDLORDS_SEARCH_PATH = "/landlords/search.php"
LEADS_CREATE_PATH = "/leads/create.php"


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    content_type: str
    text: str


class YGLClient:
    def __init__(
        self,
        base_url: str = DEFAULT_YGL_BASE_URL,
        timeout_seconds: float = 10.0,
        max_redirects: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_redirects = max_redirects
        self._transport = transport

    async def post_form(self, path: str, form: Mapping[str, Union[str, int]]) -> UpstreamResponse:
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        logger.debug("POST %s (%d fields)", url, len(form))

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                max_redirects=self.max_redirects,
                transport=self._transport,
            ) as client:
                response = await client.post(url, data=dict(form), headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            details = upstream_error_details(exc.response.text)
            message = None
            if isinstance(details, dict):
                message = details.get("message")
            raise UpstreamError(
                message or f"YGL responded with HTTP {exc.response.status_code}",
                status=exc.response.status_code,
                details=details,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(str(exc) or type(exc).__name__) from exc

        return UpstreamResponse(
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
            text=response.text,
        )
