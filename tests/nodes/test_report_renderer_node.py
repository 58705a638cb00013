"""Tests for the report renderer node."""

from datetime import datetime

import pytest

from changesage.nodes.report_renderer_node import (
    NO_BREAKING_CHANGES,
    render_breaking_changes_report,
    render_update_report,
    report_renderer_node,
)
from changesage.types.categories import CategorizedResults
from changesage.types.packages import (
    CHANGELOG,
    RELEASE_NOTES,
    UNKNOWN,
    CategorizedNote,
    ImportantTerms,
    LogMetadata,
    PackageAnalysis,
    TermRanking,
)
from changesage.types.render import RenderedReport
from changesage.types.state import AgentState

DATE = datetime(2024, 5, 1, 12, 0)


@pytest.fixture
def analyses():
    breaking = PackageAnalysis(
        package_name="parser-lib",
        log_source=RELEASE_NOTES,
        current_version="1.4.0",
        latest_version="2.0.0",
        important_terms=[
            ImportantTerms(version="2.0.0", published_at="2024-03-01", terms=[TermRanking("parse", 0.8)])
        ],
        categorized_notes=[
            CategorizedNote(
                version="2.0.0",
                published_at="2024-03-01",
                categorized=CategorizedResults(
                    breaking_change=["Removed parse()."],
                    fix=["Fixed a null pointer bug"],
                    uncategorized=["Thanks to all contributors."],
                ),
                log_metadata=LogMetadata(),
                log_source=RELEASE_NOTES,
            )
        ],
    )
    calm = PackageAnalysis(
        package_name="calm-lib",
        log_source=CHANGELOG,
        categorized_notes=[
            CategorizedNote(
                version="ALL",
                published_at=UNKNOWN,
                categorized=CategorizedResults(feature=["Added a plugin API"]),
                log_metadata=LogMetadata(),
                log_source=CHANGELOG,
            )
        ],
    )
    empty = PackageAnalysis(package_name="quiet-lib", log_source=UNKNOWN)
    return [breaking, calm, empty]


def test_update_report(analyses):
    report = render_update_report(analyses, DATE)

    assert report.startswith("# Update Report\nGenerated on: 2024-05-01")
    assert "- 1 breaking changes in 1 packages" in report
    assert "## parser-lib" in report
    assert "- Versions: 1.4.0 → 2.0.0" in report
    assert "- Source: RELEASE_NOTES" in report
    assert "- Key terms: parse" in report
    assert "#### Breaking Changes\n\n- Removed parse()." in report
    assert "#### Fixes\n\n- Fixed a null pointer bug" in report
    assert "Thanks to all contributors." not in report
    assert "- Versions: UNKNOWN → UNKNOWN" in report
    assert "No release notes available." in report
    assert report.index("#### Breaking Changes") < report.index("#### Fixes")


def test_breaking_changes_report(analyses):
    report = render_breaking_changes_report(analyses, DATE)

    assert "## parser-lib (1.4.0 → 2.0.0)" in report
    assert "- **2.0.0**: Removed parse()." in report
    assert "calm-lib" not in report


def test_no_breaking_changes(analyses):
    report = render_breaking_changes_report(analyses[1:], DATE)
    assert report.endswith(NO_BREAKING_CHANGES)


@pytest.mark.asyncio
async def test_report_renderer_node(analyses):
    state = await report_renderer_node(AgentState(analyses=analyses, generation_date=DATE, errors=[]))

    rendered = state["rendered_report"]
    assert isinstance(rendered, RenderedReport)
    assert rendered.generation_date == DATE.isoformat()
    assert rendered.metadata == {"package_count": 3, "breaking_change_count": 1}
    assert rendered.get_report_names() == ["update-report.md", "breaking-changes-report.md"]
    assert state["errors"] == []


@pytest.mark.asyncio
async def test_report_renderer_without_analyses():
    state = await report_renderer_node(AgentState(errors=[]))
    assert NO_BREAKING_CHANGES in state["rendered_report"].breaking_changes
