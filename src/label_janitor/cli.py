"""
Label Janitor
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import find_dotenv, load_dotenv

from label_janitor.client import ApiError, GraphQLClient, TransportError
from label_janitor.config import ConfigError, Settings, load_settings
from label_janitor.deletion import delete_labels
from label_janitor.labels import fetch_all_labels, select_unused
from label_janitor.report import write_report
from label_janitor.review import ReviewOutcome, prompt_confirm, review_unused_labels

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    if logging.getLogger().hasHandlers():
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_env_file(env_file: Optional[str]) -> None:
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            raise ConfigError(f"env file not found: {path}")
        load_dotenv(path, override=False)
        return
    discovered = find_dotenv(usecwd=True)
    if discovered:
        logger.debug("Loading environment from %s", discovered)
        load_dotenv(discovered, override=False)


def _build_client(settings: Settings) -> GraphQLClient:
    return GraphQLClient.from_settings(settings)


def _mode(settings: Settings) -> str:
    if settings.dry_run:
        return "dry-run"
    return "apply" if settings.deletion_enabled else "confirm-only"


def run(
    settings: Settings,
    *,
    confirm: Callable[[str], bool] = prompt_confirm,
    report_path: Optional[Path] = None,
) -> int:
    """Fetch, filter and review labels; returns the process exit code."""
    logger.info("Scanning labels at %s (mode=%s)", settings.api_url, _mode(settings))
    try:
        with _build_client(settings) as client:
            labels = fetch_all_labels(client)
            unused = select_unused(labels)
            logger.info("Scanned %d labels, %d unused", len(labels), len(unused))
            outcome, deletions = review_unused_labels(
                unused,
                settings,
                confirm=confirm,
                deleter=lambda items: delete_labels(client, items),
            )
    except (TransportError, ApiError) as exc:
        print(f"❌ Unexpected error: {exc}", file=sys.stderr)
        return 1

    status = 0
    if report_path is not None:
        try:
            write_report(
                report_path,
                mode=_mode(settings),
                labels=labels,
                unused=unused,
                deletions=deletions if outcome is ReviewOutcome.DELETED else None,
            )
            print(f"report: {report_path}")
        except OSError as exc:
            print(f"❌ could not write report: {exc}", file=sys.stderr)
            status = 1

    failures = [result for result in deletions if not result.deleted]
    if failures:
        print(f"❌ {len(failures)} of {len(deletions)} label deletions failed.", file=sys.stderr)
        status = 1
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label-janitor",
        description="Find Linear issue labels with no issues and optionally delete them.",
        epilog=(
            "Environment: LINEAR_API_KEY (required); DRY_RUN=false disables dry-run; "
            "LINEAR_API_URL, LABEL_JANITOR_TIMEOUT_S and LABEL_JANITOR_ENABLE_DELETION=1 are optional."
        ),
    )
    parser.add_argument("--env-file", default=None, help="Dotenv file to load (default: nearest .env).")
    parser.add_argument("--report", default=None, help="Optional markdown report path.")
    parser.add_argument(
        "--enable-deletion",
        action="store_true",
        help="Actually delete labels after confirmation. Has no effect in dry-run mode.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    try:
        _load_env_file(args.env_file)
        settings = load_settings()
    except ConfigError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    if args.enable_deletion:
        settings = settings.with_deletion_enabled()

    try:
        return run(settings, report_path=Path(args.report) if args.report else None)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
