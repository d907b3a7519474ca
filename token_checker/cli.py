"""Command-line entrypoint for registry snapshot validation."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from token_checker.application.use_cases import (
    RegistryValidationContext,
    ValidateRegistryUseCase,
    build_validator,
)
from token_checker.config import load_settings
from token_checker.domain.errors import TokenCheckerError
from token_checker.domain.repositories import SnapshotRepository
from token_checker.infrastructure.repositories.csv_repositories import (
    CsvSnapshotRepository,
    GitSnapshotRepository,
)
from token_checker.presentation.diff_report import render_csv, render_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a token registry snapshot against its previous version")
    parser.add_argument("previous", type=str, nargs="?", help="Path to the previous snapshot CSV")
    parser.add_argument("current", type=str, help="Path to the current snapshot CSV")
    parser.add_argument("--git-ref", type=str, help="Read the previous snapshot from this git revision of CURRENT")
    parser.add_argument("--exceptions", type=Path, help="Path to the allowed exceptions JSON file")
    parser.add_argument("--report-csv", type=Path, help="Write all issues to this CSV file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.previous is None and args.git_ref is None:
        parser.error("either PREVIOUS or --git-ref is required")
    if args.previous is not None and args.git_ref is not None:
        parser.error("PREVIOUS and --git-ref are mutually exclusive")
    return args


def _previous_repository(args: argparse.Namespace) -> SnapshotRepository:
    if args.git_ref:
        return GitSnapshotRepository(args.current, revision=args.git_ref)
    return CsvSnapshotRepository(Path(args.previous))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_settings(args.exceptions)
        context = RegistryValidationContext(
            previous_repository=_previous_repository(args),
            current_repository=CsvSnapshotRepository(Path(args.current)),
            validator=build_validator(settings),
        )
        report, _, _ = ValidateRegistryUseCase(context).execute()
    except TokenCheckerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(render_text(report))
    if args.report_csv:
        args.report_csv.write_bytes(render_csv(tuple(report.iter_all_issues())))
        logger.info("Wrote issue report to %s", args.report_csv)

    return EXIT_INVALID if report.has_issues() else EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
