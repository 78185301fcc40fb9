"""
Analysis API client — one call, validated result.

Single responsibility: call the analyze endpoint and return a validated
AnalyzeResponse. No state; the request lifecycle lives in speakmate.session.

If no base URL resolves (see endpoint.resolve_base_url) or dry_run is set,
analyze() returns a valid stub response without any network I/O.
"""

from __future__ import annotations

from speakmate.api.cancellation import CancellationToken, compose_cancellation
from speakmate.api.endpoint import build_url, resolve_base_url
from speakmate.api.models import AnalyzeOptions, AnalyzeRequest, resolve_options
from speakmate.api.schema import AnalyzeResponse, parse_response
from speakmate.api.stub import make_stub
from speakmate.api.transport import Transport
from speakmate.config.runtime import RuntimeConfig, runtime_config
from speakmate.speakmate_logging import get_logger

logger = get_logger(__name__)


class AnalyzeClient:
    def __init__(
        self,
        transport: Transport | None = None,
        config: RuntimeConfig = runtime_config,
    ) -> None:
        """
        Args:
            transport: HTTP transport; a default Transport() when omitted.
            config: Runtime override holder consulted by endpoint resolution.
        """
        self._transport = transport or Transport()
        self._config = config

    async def analyze(
        self,
        request: AnalyzeRequest,
        options: AnalyzeOptions | None = None,
    ) -> AnalyzeResponse:
        """
        Analyze a transcript and return the validated result.

        Raises:
            RequestAborted: cancellation signal or timeout fired.
            ApiHTTPError: non-2xx response.
            SchemaError: response body violates the contract.
            ConfigurationError: SPEAKMATE_TIMEOUT_MS is malformed and options
                carry no timeout_ms.
            httpx.TransportError: network failure.
        """
        opts = resolve_options(options)
        source, release = compose_cancellation(opts.cancellation_signal, opts.timeout_ms)
        try:
            return await self.analyze_with_token(request, opts, source.token)
        finally:
            release()

    async def analyze_with_token(
        self,
        request: AnalyzeRequest,
        options: AnalyzeOptions | None,
        token: CancellationToken,
    ) -> AnalyzeResponse:
        """
        Same as analyze(), but the caller owns cancellation: ``token`` already
        carries the timeout and any external signal, so no timer is started
        here and ``options.cancellation_signal`` is ignored.
        """
        opts = resolve_options(options)

        if opts.dry_run:
            logger.info("analyze_stub_mode", reason="dry_run", transcript_key=request.transcript_key)
            return make_stub(request)

        base_url = resolve_base_url(opts.base_url, self._config)
        if base_url is None:
            logger.info("analyze_stub_mode", reason="no_base_url", transcript_key=request.transcript_key)
            return make_stub(request)

        url = build_url(base_url, opts.path)
        logger.debug("analyze_request_sent", url=url, timeout_ms=opts.timeout_ms)
        raw = await self._transport.post_json(url, request.to_body(), token)
        return parse_response(raw)
