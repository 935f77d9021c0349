"""CLI to summarize GGIR day-summary activity for a BOOST subject."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from report_builder.extract import collect_activity_metrics
from report_builder.sources.ggir import (
    GGIRPaths,
    GGIRSource,
    build_subject_directory,
    validate_subject_number,
)
from report_builder.storage import AppConfig, ConfigStore, default_config_path
from report_builder.summary import (
    compute_weekly_summary,
    format_summary,
    participant_overview,
)

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        prog="report-builder",
        description="Weekly and daily activity summary from GGIR day summaries.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config database (default: $REPORT_BUILDER_CONFIG or "
        "~/.config/report_builder/report_builder.sqlite3).",
    )
    parser.add_argument(
        "--subject",
        default=None,
        help="Subject number; prompted for when omitted.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-file progress.",
    )
    subparsers = parser.add_subparsers(dest="command")
    init = subparsers.add_parser("init", help="Save the path to the vosslabhpc share.")
    init.add_argument(
        "--share-path",
        default=None,
        help="Share path; prompted for when omitted.",
    )
    return parser.parse_args(argv)


def example_share_path() -> str:
    if sys.platform == "darwin":
        return "/Volumes/vosslabhpc"
    if sys.platform.startswith("win"):
        return r"\\vosslabhpc"
    return "/mnt/vosslabhpc"


def prompt_for_share_path() -> str:
    while True:
        print(
            "Enter the path to the vosslabhpc share "
            f"(e.g., {example_share_path()}):"
        )
        value = input("> ").strip()
        if value:
            return value
        print("A value is required. Please try again.")


def prompt_for_subject_number() -> str:
    while True:
        print("Enter the subject number (four digits starting with 7, 8, or 9):")
        try:
            return validate_subject_number(input("> "))
        except ValueError as exc:
            print(f"{exc} Please try again.")


def run_init(store: ConfigStore, share_path: str | None) -> int:
    """Save the share path, prompting for it when not given."""
    value = share_path.strip() if share_path else ""
    if not value:
        value = prompt_for_share_path()
    store.save_config(AppConfig(share_path=value))
    print(f"Saved vosslabhpc share path to {store.path}")
    return 0


def run_report(store: ConfigStore, subject: str | None) -> int:
    """Locate the subject's day summaries and print the activity report."""
    config = store.load_config()
    share_path = Path(config.share_path).expanduser()
    print(f"Using configured share path: {share_path}")

    if subject is None:
        subject = prompt_for_subject_number()
    else:
        subject = validate_subject_number(subject)

    source = GGIRSource(GGIRPaths(root=build_subject_directory(share_path, subject)))
    source.validate()

    files = source.day_summary_files()
    print(
        f"Located {len(files)} target file(s) for subject {subject} "
        f"under {source.root}"
    )
    if not files:
        print("No matching files found; verify the subject data is available.")
        return 0
    for path in files:
        print(f"  {path}")

    data = collect_activity_metrics(files)
    print(f"Prepared metrics for {len(data)} participant(s).")
    for line in participant_overview(data):
        print(line)

    summary = compute_weekly_summary(data)
    for line in format_summary(summary):
        print(line)

    total_rows = sum(len(records) for records in data.values())
    print(
        f"Session ready with {total_rows} total day-level rows "
        "for downstream aggregation."
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the report CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    db_path = Path(ns.config).expanduser() if ns.config else default_config_path()
    store = ConfigStore(db_path)
    logger.debug("Using config database %s", db_path)

    if ns.command == "init":
        return run_init(store, ns.share_path)
    return run_report(store, ns.subject)
