from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .downloader.hls_copier import HlsCopier
from .errors import HlsError
from .utils.http_client import DEFAULT_USER_AGENT, HttpClient

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or a positive integer")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hlscp", description="Copy an HLS rendition from a remote source to a local directory.")
    parser.add_argument("source", help="Source HLS playlist URL")
    parser.add_argument("destination", help="Destination directory")
    parser.add_argument(
        "--workers",
        type=_non_negative_int,
        default=_env_str("WORKERS") or "0",
        help="Maximum concurrent segment downloads per playlist (0 = unbounded)",
    )
    parser.add_argument("--timeout", type=float, default=_env_str("TIMEOUT") or "30", help="HTTP timeout in seconds")
    parser.add_argument("--user-agent", default=_env_str("USER_AGENT") or DEFAULT_USER_AGENT, help="User-Agent header to send")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        default=_env_bool("NO_PROGRESS"),
        help="Hide the per-playlist segment progress bar",
    )
    parser.add_argument(
        "--log-level",
        default=(_env_str("LOG_LEVEL") or "INFO").upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        with HttpClient(timeout=args.timeout, user_agent=args.user_agent) as http_client:
            copier = HlsCopier(
                http_client,
                args.source,
                args.destination,
                workers=args.workers,
                show_progress=not args.no_progress,
            )
            written = copier.copy_hls()
    except HlsError as exc:
        logging.error("%s", exc)
        return 1

    logging.info("HLS copy completed: %s files in %s", len(written), args.destination)
    return 0


if __name__ == "__main__":
    sys.exit(main())
