"""End-to-end subprocess tests for scripts/validate_manifest.py.

Runs the script as a real subprocess so stdout, stderr, and returncode are
captured naturally.  Every written report is checked against
ValidationReport.v1.json.
"""

import json
import subprocess
import sys
from pathlib import Path

import jsonschema

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SCRIPT = Path(__file__).resolve().parents[2] / "scripts/validate_manifest.py"

_SCHEMA_OUT: dict = json.loads(
    (
        Path(__file__).resolve().parents[2]
        / "third_party" / "contracts" / "schemas" / "ValidationReport.v1.json"
    ).read_text(encoding="utf-8")
)


def _make_manifest(**overrides) -> dict:
    manifest = {
        "gameId": "gdpr-basics",
        "version": "1.0.0",
        "metadata": {
            "title": "GDPR Training Module",
            "description": "Essential GDPR principles",
            "duration": "5 minutes",
            "targetAudience": "Municipal employees",
            "language": "sv",
        },
        "scenes": [{"id": "scene-1", "type": "dialogue", "messages": [{"text": "Hej!"}]}],
    }
    manifest.update(overrides)
    return manifest


def _write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        capture_output=True,
        text=True,
    )


def _read_report(path: Path) -> dict:
    report = json.loads(path.read_text(encoding="utf-8"))
    jsonschema.validate(instance=report, schema=_SCHEMA_OUT)
    return report


# ---------------------------------------------------------------------------
# Valid / invalid content
# ---------------------------------------------------------------------------


def test_valid_manifest_exits_0(tmp_path: Path) -> None:
    manifest_path = _write_json(tmp_path / "GameManifest.json", _make_manifest())

    result = _run("--input", str(manifest_path))

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "OK: valid; 0 errors; 0 warnings"


def test_invalid_manifest_exits_1_and_lists_errors(tmp_path: Path) -> None:
    manifest_path = _write_json(tmp_path / "GameManifest.json", _make_manifest(scenes=[]))

    result = _run("--input", str(manifest_path))

    assert result.returncode == 1
    assert result.stdout == ""
    assert "error: scenes: Game must have at least one scene (invalid_value)" in result.stderr
    assert "ERROR: invalid; 1 errors; 0 warnings" in result.stderr


def test_report_written_and_conforms_to_contract(tmp_path: Path) -> None:
    manifest = _make_manifest(version=2)
    manifest["metadata"]["language"] = "zz"
    manifest_path = _write_json(tmp_path / "GameManifest.json", manifest)
    report_path = tmp_path / "out" / "GameManifest.validation.json"

    result = _run("--input", str(manifest_path), "--output", str(report_path))

    assert result.returncode == 1
    report = _read_report(report_path)
    assert report["schema_id"] == "ValidationReport"
    assert report["content_type"] == "game"
    assert report["source"] == str(manifest_path)
    assert report["result"]["isValid"] is False
    assert report["result"]["errors"] == [
        {"path": "version", "message": "Field 'version' must be of type string, got number",
         "kind": "invalid_type"}
    ]
    assert [w["path"] for w in report["result"]["warnings"]] == ["metadata.language"]


def test_report_is_written_for_valid_content(tmp_path: Path) -> None:
    manifest_path = _write_json(tmp_path / "GameManifest.json", _make_manifest())
    report_path = tmp_path / "report.json"

    result = _run("-i", str(manifest_path), "-o", str(report_path))

    assert result.returncode == 0
    assert _read_report(report_path)["result"] == {"isValid": True, "errors": [], "warnings": []}


def test_null_document_is_reported_at_root(tmp_path: Path) -> None:
    manifest_path = tmp_path / "GameManifest.json"
    manifest_path.write_text("null", encoding="utf-8")
    report_path = tmp_path / "report.json"

    result = _run("--input", str(manifest_path), "--output", str(report_path))

    assert result.returncode == 1
    errors = _read_report(report_path)["result"]["errors"]
    assert [(e["path"], e["kind"]) for e in errors] == [("root", "invalid_type")]


# ---------------------------------------------------------------------------
# --strict and --type
# ---------------------------------------------------------------------------


def test_warnings_pass_without_strict(tmp_path: Path) -> None:
    manifest = _make_manifest()
    manifest["metadata"]["language"] = "zz"
    manifest_path = _write_json(tmp_path / "GameManifest.json", manifest)

    result = _run("--input", str(manifest_path))

    assert result.returncode == 0
    assert result.stdout.strip() == "OK: valid; 0 errors; 1 warnings"
    assert "warning: metadata.language" in result.stderr


def test_warnings_fail_in_strict_mode(tmp_path: Path) -> None:
    manifest = _make_manifest()
    manifest["metadata"]["language"] = "zz"
    manifest_path = _write_json(tmp_path / "GameManifest.json", manifest)

    result = _run("--input", str(manifest_path), "--strict")

    assert result.returncode == 1
    assert result.stdout == ""
    assert "ERROR: warnings present in --strict mode" in result.stderr


def test_quiz_content_type(tmp_path: Path) -> None:
    quiz = {"questions": [{"question_text": "Q?", "options": [{"option_text": "A", "is_correct": False}]}]}
    quiz_path = _write_json(tmp_path / "quiz.json", quiz)
    report_path = tmp_path / "quiz.validation.json"

    result = _run("--input", str(quiz_path), "--type", "quiz", "--output", str(report_path))

    assert result.returncode == 1
    report = _read_report(report_path)
    assert report["content_type"] == "quiz"
    assert [e["path"] for e in report["result"]["errors"]] == ["root.questions[0]"]


def test_unknown_content_type_is_usage_error(tmp_path: Path) -> None:
    manifest_path = _write_json(tmp_path / "GameManifest.json", _make_manifest())

    result = _run("--input", str(manifest_path), "--type", "podcast")

    assert result.returncode == 2


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


def test_missing_input_exits_2(tmp_path: Path) -> None:
    result = _run("--input", str(tmp_path / "nope.json"))

    assert result.returncode == 2
    assert "ERROR: input file not found" in result.stderr


def test_malformed_json_exits_1(tmp_path: Path) -> None:
    bad = tmp_path / "GameManifest.json"
    bad.write_text("{not json", encoding="utf-8")

    result = _run("--input", str(bad))

    assert result.returncode == 1
    assert "ERROR: failed to load" in result.stderr


def test_output_is_deterministic(tmp_path: Path) -> None:
    manifest = _make_manifest(scenes=[{"id": "s1", "type": "mystery"}])
    manifest_path = _write_json(tmp_path / "GameManifest.json", manifest)
    report_path = tmp_path / "report.json"

    _run("--input", str(manifest_path), "--output", str(report_path))
    first = report_path.read_bytes()
    _run("--input", str(manifest_path), "--output", str(report_path))

    assert report_path.read_bytes() == first


def test_report_schema_is_well_formed() -> None:
    jsonschema.Draft202012Validator.check_schema(_SCHEMA_OUT)
