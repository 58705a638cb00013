"""End-to-end tests for the ChangeSage workflow and CLI."""

import json
import sys

import pytest

from changesage.types.packages import PackageNotes
from changesage.workflow import create_workflow, load_packages, main, run_workflow, write_reports

CHANGELOG_TEXT = """# Changelog

## Breaking Changes
- This release removes the deprecated parse() method and requires migration to parseAsync().

## Fixes
- Fixed a null pointer bug
"""


def test_create_workflow():
    app = create_workflow({})
    assert app is not None


def test_load_packages_from_json(tmp_path):
    path = tmp_path / "packages.json"
    path.write_text(
        json.dumps(
            [
                {
                    "package_name": "parser-lib",
                    "current_version": "1.4.0",
                    "latest_version": "2.0.0",
                    "release_notes": [{"notes": CHANGELOG_TEXT, "version": "2.0.0"}],
                },
                {"package_name": "skipped-lib", "release_notes": "SKIPPED"},
            ]
        )
    )
    packages = load_packages(str(path))
    assert [p.package_name for p in packages] == ["parser-lib", "skipped-lib"]
    assert packages[0].release_notes[0].version == "2.0.0"
    assert packages[1].release_notes == "SKIPPED"


def test_load_packages_from_directory(tmp_path):
    (tmp_path / "b-lib.md").write_text(CHANGELOG_TEXT)
    (tmp_path / "a-lib.txt").write_text("## Fixes\n- Fixed a bug\n")
    (tmp_path / "ignored.json").write_text("[]")

    packages = load_packages(str(tmp_path))
    assert [p.package_name for p in packages] == ["a-lib", "b-lib"]
    assert packages[1].changelog == CHANGELOG_TEXT


def test_load_packages_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_packages(str(tmp_path / "nothing.md"))


def test_run_workflow():
    final_state = run_workflow({"packages": [PackageNotes(package_name="parser-lib", changelog=CHANGELOG_TEXT)]})

    assert final_state["errors"] == []
    analysis = final_state["analyses"][0]
    assert analysis.breaking_changes() == [
        "This release removes the deprecated parse() method and requires migration to parseAsync()."
    ]
    assert analysis.categorized_notes[0].categorized.fix == ["Fixed a null pointer bug"]
    assert "## parser-lib" in final_state["rendered_report"].markdown


def test_write_reports(tmp_path):
    final_state = run_workflow({"packages": [PackageNotes(package_name="parser-lib", changelog=CHANGELOG_TEXT)]})
    written = write_reports(final_state, str(tmp_path / "out"))

    assert sorted(p.split("/")[-1] for p in written) == ["breaking-changes-report.md", "update-report.md"]
    assert "parse()" in (tmp_path / "out" / "breaking-changes-report.md").read_text()


def test_main(tmp_path, monkeypatch):
    changelog = tmp_path / "parser-lib.md"
    changelog.write_text(CHANGELOG_TEXT)
    output_dir = tmp_path / "reports"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["changesage", str(changelog), "--output-dir", str(output_dir)])

    main()

    assert (output_dir / "update-report.md").exists()
    assert (output_dir / "breaking-changes-report.md").exists()


def test_main_exits_on_bad_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["changesage", str(tmp_path / "missing.json")])

    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
