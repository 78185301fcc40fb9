"""
HTTP transport for the analysis endpoint.

Responsibilities:
- POST a JSON body with JSON accept/content-type headers (httpx.AsyncClient).
- Abort promptly when the call's cancellation token fires (RequestAborted).
- Convert non-2xx responses into ApiHTTPError with a short body snippet.
- Normalize the body into an untyped structural value for schema validation.

No timeout is configured on httpx itself; the derived cancellation token
(see cancellation.compose_cancellation) is the only timeout.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from speakmate.api.cancellation import CancellationToken
from speakmate.core.exceptions import ApiHTTPError, RequestAborted
from speakmate.speakmate_logging import get_logger

logger = get_logger(__name__)

JSON_HEADERS = {
    "content-type": "application/json",
    "accept": "application/json",
}

# Max characters of an error body kept for diagnostics
SNIPPET_MAX_CHARS = 300


def body_snippet(text: str, limit: int = SNIPPET_MAX_CHARS) -> str:
    return text[:limit] + "…" if len(text) > limit else text


def safe_json(text: str) -> Any:
    """Best-effort JSON parse; unparseable text becomes {"_raw": text} so validation reports it."""
    try:
        return json.loads(text)
    except ValueError:
        return {"_raw": text}


def raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    snippet = body_snippet(response.text)
    logger.warning(
        "transport_http_error",
        url=str(response.request.url),
        status=response.status_code,
        snippet=snippet[:120],
    )
    raise ApiHTTPError(response.status_code, response.reason_phrase, snippet)


def decode_body(response: httpx.Response) -> Any:
    """JSON when declared; otherwise text with best-effort JSON parsing."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        return response.json()
    return safe_json(response.text)


class Transport:
    """
    Sends analysis requests. Pass an httpx.AsyncClient to share a connection
    pool (or to inject a MockTransport in tests); otherwise a client is opened
    for each call.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    async def post_json(self, url: str, body: dict[str, Any], token: CancellationToken) -> Any:
        """
        POST ``body`` to ``url`` bound to ``token``.

        Raises:
            RequestAborted: token fired before the response was decoded.
            ApiHTTPError: non-2xx status.
            httpx.TransportError: network failure.
        """
        token.raise_if_cancelled()
        task = asyncio.ensure_future(self._send(url, body))
        remove = token.add_callback(lambda _reason: task.cancel())
        try:
            return await task
        except asyncio.CancelledError:
            if token.cancelled and task.cancelled():
                logger.debug("transport_aborted", url=url, reason=token.reason)
                raise RequestAborted(token.reason) from None
            raise
        finally:
            remove()

    async def _send(self, url: str, body: dict[str, Any]) -> Any:
        if self._client is not None:
            return await self._exchange(self._client, url, body)
        async with httpx.AsyncClient() as client:
            return await self._exchange(client, url, body)

    async def _exchange(self, client: httpx.AsyncClient, url: str, body: dict[str, Any]) -> Any:
        response = await client.post(url, json=body, headers=JSON_HEADERS, timeout=None)
        raise_for_status(response)
        return decode_body(response)
