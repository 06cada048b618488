#!/usr/bin/env python3
"""Validate a training-game manifest (or a bare scene payload) from a JSON file.

Usage:
    python scripts/validate_manifest.py \\
        --input  /path/to/GameManifest.json \\
        [--output /path/to/GameManifest.validation.json] \\
        [--type game|scene|quiz|dialogue] [--strict]

Exit codes:
    0  — content is valid
    1  — content is invalid, unreadable, or has warnings in --strict mode
    2  — bad arguments / input file not found
"""

import argparse
import json
import sys
from pathlib import Path

import jsonschema

# Ensure project root is on sys.path so validators/* and models/* are importable
# when the script is invoked from any working directory.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.models.game_manifest import ContentType  # noqa: E402
from app.utils.logging import configure_logging  # noqa: E402
from validators.manifest import ContentValidator  # noqa: E402

# ---------------------------------------------------------------------------
# Report contract, loaded once at import time relative to project root.
# ---------------------------------------------------------------------------
_CONTRACTS_DIR = Path(__file__).resolve().parent.parent / "third_party" / "contracts" / "schemas"
_SCHEMA_OUT = json.loads((_CONTRACTS_DIR / "ValidationReport.v1.json").read_text(encoding="utf-8"))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input", "-i",
        required=True,
        metavar="PATH",
        help="Path to the JSON document produced by the content pipeline.",
    )
    parser.add_argument(
        "--output", "-o",
        metavar="PATH",
        help="Optional path to write the ValidationReport JSON.",
    )
    parser.add_argument(
        "--type", "-t",
        dest="content_type",
        choices=[t.value for t in ContentType],
        default=ContentType.GAME.value,
        help="What the document is (default: game).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit 1 if the content has any warnings.",
    )
    args = parser.parse_args()
    configure_logging()

    input_path = Path(args.input)

    # 1. Validate input path
    if not input_path.exists():
        print(f"ERROR: input file not found: {input_path}", file=sys.stderr)
        sys.exit(2)

    # 2. Load content
    try:
        content = json.loads(input_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        print(f"ERROR: failed to load {input_path}: {exc}", file=sys.stderr)
        sys.exit(1)

    # 3. Validate
    result = ContentValidator().validate(content, args.content_type)

    # 4. Build report envelope and check it against the contract
    report = {
        "schema_id": "ValidationReport",
        "schema_version": "1.0.0",
        "producer": "content/validate_manifest.py",
        "content_type": args.content_type,
        "source": str(input_path),
        "result": result.model_dump(mode="json", by_alias=True),
    }
    try:
        jsonschema.validate(instance=report, schema=_SCHEMA_OUT)
    except jsonschema.ValidationError as exc:
        print(
            f"ERROR: report does not conform to ValidationReport.v1.json: {exc.message}",
            file=sys.stderr,
        )
        sys.exit(1)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(report, indent=2, sort_keys=True, ensure_ascii=False),
            encoding="utf-8",
        )

    # 5. Diagnostics, one per line
    for error in result.errors:
        print(f"error: {error}", file=sys.stderr)
    for warning in result.warnings:
        print(f"warning: {warning}", file=sys.stderr)

    summary = f"{len(result.errors)} errors; {len(result.warnings)} warnings"
    if not result.is_valid:
        print(f"ERROR: invalid; {summary}", file=sys.stderr)
        sys.exit(1)
    if args.strict and result.warnings:
        print(f"ERROR: warnings present in --strict mode; {summary}", file=sys.stderr)
        sys.exit(1)

    print(f"OK: valid; {summary}")


if __name__ == "__main__":
    main()
