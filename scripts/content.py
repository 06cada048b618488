#!/usr/bin/env python3
"""content — CLI for the content validator.

Usage:
    content validate --in <GameManifest.json> [--out <report.json>] [--type T] [--strict]
    content verify

Subcommands:
    validate  Validate a manifest or scene payload and optionally write a ValidationReport.
    verify    Validate twice and assert byte-identical reports (determinism check),
              for valid and invalid content alike.
              Requires RUN_DIR env var pointing to a directory containing GameManifest.json;
              the report is written to RUN_DIR/GameManifest.validation.json.

Exit codes:
    0  — success
    1  — content invalid / verification failed; or warnings found in --strict mode
    2  — invalid usage or missing input file
"""
import os
import subprocess
import sys
from pathlib import Path

_SCRIPTS_DIR = Path(__file__).resolve().parent
_VALIDATE_SCRIPT = _SCRIPTS_DIR / "validate_manifest.py"

_MANIFEST_NAME = "GameManifest.json"
_REPORT_NAME = "GameManifest.validation.json"

_USAGE = """\
Usage:
  content validate --in <path> [--out <path>] [--type game|scene|quiz|dialogue] [--strict]
  content verify
"""


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

def cmd_validate(argv: list[str]) -> int:
    """Delegate to validate_manifest.py, translating --in/--out to --input/--output."""
    import argparse

    parser = argparse.ArgumentParser(prog="content validate", add_help=True)
    parser.add_argument("--in",  dest="input",  required=True, metavar="PATH",
                        help="Input JSON document")
    parser.add_argument("--out", dest="output", metavar="PATH",
                        help="Output ValidationReport JSON")
    parser.add_argument("--type", dest="content_type", default="game",
                        choices=["game", "scene", "quiz", "dialogue"],
                        help="What the document is (default: game)")
    parser.add_argument("--strict", action="store_true",
                        help="Exit 1 if the content has any warnings")

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code) if exc.code is not None else 2

    cmd = [
        sys.executable, str(_VALIDATE_SCRIPT),
        "--input", args.input,
        "--type",  args.content_type,
    ]
    if args.output:
        cmd.extend(["--output", args.output])
    if args.strict:
        cmd.append("--strict")

    result = subprocess.run(cmd)
    return result.returncode


# ---------------------------------------------------------------------------
# verify
# ---------------------------------------------------------------------------

def _run_validate(run_dir: Path) -> bool:
    """Validate RUN_DIR/GameManifest.json; True when a fresh report was written.

    Invalid content still produces a report (exit 1), so it counts as a
    completed round; unreadable input or a contract failure leaves no report.
    """
    report = run_dir / _REPORT_NAME
    report.unlink(missing_ok=True)
    cmd = [
        sys.executable, str(_VALIDATE_SCRIPT),
        "--input",  str(run_dir / _MANIFEST_NAME),
        "--output", str(report),
    ]
    returncode = subprocess.run(cmd, capture_output=True).returncode
    return returncode in (0, 1) and report.is_file()


def cmd_verify() -> int:
    run_dir_str = os.environ.get("RUN_DIR")
    if not run_dir_str:
        print("ERROR: content verification failed", file=sys.stderr)
        return 1
    run_dir = Path(run_dir_str)

    # Round 1
    if not _run_validate(run_dir):
        print("ERROR: content verification failed", file=sys.stderr)
        return 1
    bytes_1 = (run_dir / _REPORT_NAME).read_bytes()

    # Round 2
    if not _run_validate(run_dir):
        print("ERROR: content verification failed", file=sys.stderr)
        return 1
    bytes_2 = (run_dir / _REPORT_NAME).read_bytes()

    if bytes_1 != bytes_2:
        print("ERROR: content verification failed", file=sys.stderr)
        return 1

    print("OK: content verified")
    return 0


# ---------------------------------------------------------------------------
# entry point
# ---------------------------------------------------------------------------

def main() -> None:
    if len(sys.argv) < 2:
        print(_USAGE, file=sys.stderr)
        sys.exit(2)

    subcmd, rest = sys.argv[1], sys.argv[2:]

    if subcmd == "validate":
        sys.exit(cmd_validate(rest))
    elif subcmd == "verify":
        sys.exit(cmd_verify())
    else:
        print(f"Unknown subcommand: {subcmd!r}\n{_USAGE}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
