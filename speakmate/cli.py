"""
Command-line entrypoint: run one analysis and print the result as JSON.

    speakmate-analyze uploads/2024/abc.json --language en-US --timeout-ms 10000

Env: SPEAKMATE_API_BASE_URL (absent -> stub response), SPEAKMATE_TIMEOUT_MS,
SPEAKMATE_ANALYZE_PATH, LOG_LEVEL, LOG_FORMAT. Logs go to stderr.

Exit codes: 0 success, 1 analysis error, 2 usage error, 130 interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import signal
import sys

from pydantic import ValidationError

from speakmate.api.models import AnalyzeOptions, AnalyzeRequest
from speakmate.core.exceptions import ConfigurationError
from speakmate.session import AnalyzeSession
from speakmate.speakmate_logging import get_logger

logger = get_logger("speakmate.cli")

EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speakmate-analyze",
        description="Analyze an uploaded transcript and print the validated result.",
    )
    parser.add_argument("transcript_key", help="Reference to the uploaded transcript blob or key")
    parser.add_argument("--language", default=None, help="BCP-47 language hint, e.g. en-US")
    parser.add_argument("--base-url", default=None, help="Override the API base URL")
    parser.add_argument("--path", default=None, help="Endpoint path (default /analyze)")
    parser.add_argument("--timeout-ms", type=int, default=None, help="Request timeout in milliseconds")
    parser.add_argument("--dry-run", action="store_true", help="Return a stub response without network I/O")
    return parser


async def run(args: argparse.Namespace, session: AnalyzeSession | None = None) -> int:
    session = session or AnalyzeSession()
    request = AnalyzeRequest(transcript_key=args.transcript_key, language=args.language)
    options = AnalyzeOptions(
        base_url=args.base_url,
        path=args.path,
        timeout_ms=args.timeout_ms,
        dry_run=args.dry_run or None,
    )

    interrupted = False

    def _handle_sigint() -> None:
        nonlocal interrupted
        interrupted = True
        logger.info("cli_interrupt")
        session.cancel()

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, _handle_sigint)
    except (NotImplementedError, RuntimeError, ValueError):
        # No loop signal handlers on this platform / thread
        pass

    try:
        response = await session.analyze(request, options)
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError, ValueError):
            pass

    if response is not None:
        print(json.dumps(response.model_dump(mode="json"), indent=2))
        return 0
    if session.error is not None:
        print(f"error: {session.error}", file=sys.stderr)
        return EXIT_USAGE if isinstance(session.error, ConfigurationError) else EXIT_ERROR
    if interrupted:
        return EXIT_INTERRUPTED
    # Aborted without a surfaced error (timeout)
    print("error: request was canceled", file=sys.stderr)
    return EXIT_ERROR


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except (ConfigurationError, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
