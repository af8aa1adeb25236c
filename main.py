"""Run the Skirmish HTTP API under uvicorn for local development."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from skirmish.config import get_settings


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Serve the Skirmish API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Restart on source changes")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Root log level (defaults to LOG_LEVEL)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.advisor_configured:
        logging.getLogger(__name__).warning(
            "ADVISOR_API_KEY is not set; the AI will play on its fallback hint"
        )

    # Reload needs an import string rather than an app object.
    uvicorn.run(
        "skirmish.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
