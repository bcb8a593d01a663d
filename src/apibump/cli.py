"""apibump CLI: diff, verify and bump commands over snapshot JSON files."""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_THRESHOLD = 2


def _build_parser() -> argparse.ArgumentParser:
    # Get version for --version argument (handle PackageNotFoundError)
    try:
        apibump_version = get_version("apibump")
    except PackageNotFoundError:
        apibump_version = "dev"

    parser = argparse.ArgumentParser(
        prog="apibump",
        description="apibump: Deterministic API diff and semantic-version bump classification"
    )
    parser.add_argument("--version", action="version", version=f"apibump {apibump_version}")

    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (overrides APIBUMP_LOGGING__LEVEL)."
    )
    parent_parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        default=None,
        help="Log format (overrides APIBUMP_LOGGING__FORMAT)."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Diff two package snapshots and report the required version bump",
        parents=[parent_parser]
    )
    diff_parser.add_argument(
        "--from",
        dest="snapshot_v1",
        type=Path,
        required=True,
        help="Path to the earlier snapshot"
    )
    diff_parser.add_argument(
        "--to",
        dest="snapshot_v2",
        type=Path,
        required=True,
        help="Path to the later snapshot"
    )
    diff_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write api_diff.json here instead of printing the report to stdout"
    )
    diff_parser.add_argument(
        "--fail-on",
        choices=["minor", "major"],
        default=None,
        help="Exit with status 2 when the severity reaches this level"
    )

    # verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Validate a snapshot file",
        parents=[parent_parser]
    )
    verify_parser.add_argument(
        "snapshot_path",
        type=Path,
        help="Path to snapshot JSON"
    )

    # bump command
    bump_parser = subparsers.add_parser(
        "bump",
        help="Print the version the later snapshot should be published as",
        parents=[parent_parser]
    )
    bump_parser.add_argument(
        "--from",
        dest="snapshot_v1",
        type=Path,
        required=True,
        help="Path to the earlier snapshot (must carry a version)"
    )
    bump_parser.add_argument(
        "--to",
        dest="snapshot_v2",
        type=Path,
        required=True,
        help="Path to the later snapshot"
    )
    return parser


def _setup(args: argparse.Namespace):
    from .config import load_settings
    from .logging import configure_logging

    logging_overrides = {}
    if args.log_level:
        logging_overrides["level"] = args.log_level
    if args.log_format:
        logging_overrides["format"] = args.log_format
    overrides = {"logging": logging_overrides} if logging_overrides else {}
    settings = load_settings(**overrides)
    configure_logging(config=settings.logging)
    return settings


def _run_diff(args: argparse.Namespace, indent: Optional[int]) -> int:
    from ._internal.canonical_json import canonical_dumps
    from .api import diff
    from .kernel.severity import Severity

    result = diff(args.snapshot_v1.resolve(), args.snapshot_v2.resolve())
    report_json = canonical_dumps(result.model_dump(mode="json"), indent=indent)

    if args.output_dir is not None:
        output_dir = Path(args.output_dir).resolve()
        output_dir.mkdir(parents=True, exist_ok=True)
        report_out = output_dir / "api_diff.json"
        report_out.write_text(report_json + "\n", encoding="utf-8")
        if not args.quiet:
            print(f"[{result.severity}] Diff complete")
            print(f"  Report: {report_out}")
            for code, count in sorted(result.change_summary.items()):
                print(f"  {code}: {count}")
            if result.expected_version is not None:
                print(f"  Next version: {result.expected_version}")
    elif not args.quiet:
        print(report_json)

    if args.fail_on is not None:
        if Severity.parse(result.severity) >= Severity.parse(args.fail_on):
            if not args.quiet:
                print(f"Severity {result.severity} reaches --fail-on {args.fail_on}", file=sys.stderr)
            return EXIT_THRESHOLD
    return EXIT_OK


def _run_verify(args: argparse.Namespace) -> int:
    from .api import validate

    result = validate(args.snapshot_path.resolve())
    if not args.quiet:
        status = "OK" if result.ok else "FAILED"
        print(f"[{status}] Verification complete")
        print(f"  Errors: {len(result.errors)}")
        for issue in result.errors:
            where = f" ({issue.location})" if issue.location else ""
            print(f"  {issue.code}{where}: {issue.message}")
    return EXIT_OK if result.ok else EXIT_ERROR


def _run_bump(args: argparse.Namespace) -> int:
    from .api import suggest_version

    print(suggest_version(args.snapshot_v1.resolve(), args.snapshot_v2.resolve()))
    return EXIT_OK


def main(argv: Optional[list] = None) -> None:
    """Main CLI entry point for apibump commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_ERROR)

    try:
        settings = _setup(args)
        if args.command == "diff":
            code = _run_diff(args, settings.report.indent)
        elif args.command == "verify":
            code = _run_verify(args)
        else:
            code = _run_bump(args)
    except (ValueError, OSError) as e:
        # SnapshotLoadError and ConfigError are ValueErrors; OSError covers report writes
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    sys.exit(code)


if __name__ == "__main__":
    main()
