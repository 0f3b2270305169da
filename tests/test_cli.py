"""Tests for the command line interface."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from click.testing import CliRunner

from relnotes import cli

SAMPLE: dict[str, Any] = {
    "notes": [
        {
            "pr_number": 1,
            "markdown": "Removed the deprecated flag",
            "action_required": True,
        },
        {"pr_number": 2, "markdown": "Fixed a crash", "kinds": ["bug"]},
        {
            "pr_number": 3,
            "markdown": "Added a field",
            "sigs": ["api-machinery"],
            "kinds": ["api-change"],
        },
        {"pr_number": 4, "markdown": "Updated docs"},
    ],
    "history": [4, 3, 2, 1],
}


def _notes_file(tmp_path: Path) -> Path:
    """Write the sample notes to a YAML file."""

    path = tmp_path / "notes.yaml"
    path.write_text(yaml.safe_dump(SAMPLE), encoding="utf-8")
    return path


def test_render_outputs_markdown(tmp_path: Path) -> None:
    """Ensure the notes are rendered as Markdown on the console."""

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["render", str(_notes_file(tmp_path))])

    assert result.exit_code == 0
    assert result.output == (
        "## Action Required\n\n- Removed the deprecated flag\n\n\n"
        "### API Changes\n\n- Added a field\n\n\n"
        "### Notes from Individual SIGs\n\n"
        "#### SIG API Machinery\n\n- Added a field\n\n\n\n"
        "### Bug Fixes\n\n- Fixed a crash\n\n\n"
        "### Other Notable Changes\n\n- Updated docs\n\n\n"
    )


def test_render_outputs_json(tmp_path: Path) -> None:
    """Ensure the organized document can be exported as JSON."""

    runner = CliRunner()
    result = runner.invoke(
        cli.cli, ["render", str(_notes_file(tmp_path)), "--format", "json"]
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["api_changes"] == ["Added a field"]
    assert data["sigs"] == {"api-machinery": ["Added a field"]}
    assert data["uncategorized"] == ["Updated docs"]


def test_render_writes_yaml_to_file(tmp_path: Path) -> None:
    """Ensure YAML output is written to a file."""

    out_file = tmp_path / "doc.yaml"
    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "render",
            str(_notes_file(tmp_path)),
            "--format",
            "yaml",
            "--output",
            str(out_file),
        ],
    )

    assert result.exit_code == 0
    assert result.output == ""
    data = yaml.safe_load(out_file.read_text(encoding="utf-8"))
    assert data["action_required"] == ["Removed the deprecated flag"]
    assert data["bug_fixes"] == ["Fixed a crash"]


def test_render_with_downloads_table(tmp_path: Path) -> None:
    """Ensure the downloads table is rendered when tarballs are given."""

    tars = tmp_path / "tars"
    tars.mkdir()
    (tars / "kubernetes.tar.gz").write_bytes(b"release")
    digest = hashlib.sha512(b"release").hexdigest()

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "render",
            str(_notes_file(tmp_path)),
            "--tars",
            str(tars),
            "--bucket",
            "my-bucket",
            "--prev-tag",
            "v1.0.0",
            "--new-tag",
            "v1.1.0",
        ],
    )

    assert result.exit_code == 0
    assert result.output.startswith("# v1.1.0\n\n")
    assert (
        "[kubernetes.tar.gz](https://storage.googleapis.com/my-bucket/"
        f"release/v1.1.0/kubernetes.tar.gz) | `{digest}`" in result.output
    )
    assert "## Changelog since v1.0.0" in result.output


def test_render_reads_tags_from_environment(tmp_path: Path) -> None:
    """Ensure rendering options can come from environment variables."""

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        ["render", str(_notes_file(tmp_path))],
        env={
            "RELNOTES_TARS": str(tmp_path),
            "RELNOTES_PREV_TAG": "v1.0.0",
            "RELNOTES_NEW_TAG": "v1.1.0",
        },
    )

    assert result.exit_code == 0
    assert "## Downloads for v1.1.0" in result.output


def test_render_missing_tags_fails(tmp_path: Path) -> None:
    """Ensure missing tags are reported without writing the output."""

    out_file = tmp_path / "doc.md"
    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "render",
            str(_notes_file(tmp_path)),
            "--tars",
            str(tmp_path),
            "--output",
            str(out_file),
        ],
        env={"RELNOTES_PREV_TAG": "", "RELNOTES_NEW_TAG": ""},
    )

    assert result.exit_code == 1
    assert "release tags not specified" in result.output
    assert not out_file.exists()


def test_render_invalid_notes_file(tmp_path: Path) -> None:
    """Ensure malformed notes files are reported as errors."""

    path = tmp_path / "notes.json"
    path.write_text('{"unexpected": true}', encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["render", str(path)])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_data_formats_reject_download_options(tmp_path: Path) -> None:
    """Ensure download options are not silently dropped for JSON output."""

    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "render",
            str(_notes_file(tmp_path)),
            "--format",
            "json",
            "--tars",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 2
    assert "only apply to markdown output" in result.output


def test_debug_logging_to_file(tmp_path: Path) -> None:
    """Ensure the log file option is accepted."""

    log_file = tmp_path / "relnotes.log"
    runner = CliRunner()
    result = runner.invoke(
        cli.cli,
        [
            "--debug",
            "--log-file",
            str(log_file),
            "render",
            str(_notes_file(tmp_path)),
        ],
    )

    assert result.exit_code == 0
    assert "## Action Required" in result.output


def test_version() -> None:
    """Ensure the version option prints the program name."""

    runner = CliRunner()
    result = runner.invoke(cli.cli, ["--version"])

    assert result.exit_code == 0
    assert "relnotes" in result.output
