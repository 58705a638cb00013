"""Report Renderer Node for converting package analyses into markdown reports."""

from datetime import datetime
from typing import List

from loguru import logger

from changesage.types.categories import BUCKETS, UNCATEGORIZED
from changesage.types.packages import UNKNOWN, PackageAnalysis
from changesage.types.render import RenderedReport
from changesage.types.state import AgentState

BUCKET_TITLES = {
    "breaking_change": "Breaking Changes",
    "feature": "Features",
    "fix": "Fixes",
    "deprecation": "Deprecations",
    "security": "Security",
    "documentation": "Documentation",
    "performance": "Performance",
    "refactor": "Refactoring",
    "chore": "Chores",
    "miscellaneous": "Miscellaneous",
}

NO_BREAKING_CHANGES = "No breaking changes detected."


def _generate_summary(analyses: List[PackageAnalysis]) -> str:
    """Generate a summary section across all packages."""
    breaking_count = sum(len(analysis.breaking_changes()) for analysis in analyses)
    affected = [analysis for analysis in analyses if analysis.breaking_changes()]

    summary = ["## Summary\n"]
    summary.append(f"This report covers {len(analyses)} packages:")
    summary.append(f"- {breaking_count} breaking changes in {len(affected)} packages")
    summary.append(f"- {len(analyses) - len(affected)} packages without breaking changes\n")
    return "\n".join(summary)


def _format_versions(analysis: PackageAnalysis) -> str:
    current = analysis.current_version or UNKNOWN
    latest = analysis.latest_version or UNKNOWN
    return f"{current} → {latest}"


def _format_package(analysis: PackageAnalysis) -> str:
    """Format one package's section of the update report."""
    content = [f"## {analysis.package_name}\n"]
    content.append(f"- Versions: {_format_versions(analysis)}")
    content.append(f"- Source: {analysis.log_source}")

    terms = [ranking.term for important in analysis.important_terms for ranking in important.terms]
    if terms:
        content.append(f"- Key terms: {', '.join(dict.fromkeys(terms))}")
    content.append("")

    if not analysis.categorized_notes:
        content.append("No release notes available.\n")
        return "\n".join(content)

    for note in analysis.categorized_notes:
        content.append(f"### {note.version} ({note.published_at})\n")
        for name in BUCKETS:
            if name == UNCATEGORIZED:
                continue
            sentences = note.categorized.bucket(name)
            if not sentences:
                continue
            content.append(f"#### {BUCKET_TITLES[name]}\n")
            content.extend(f"- {sentence}" for sentence in sentences)
            content.append("")

    return "\n".join(content)


def render_update_report(analyses: List[PackageAnalysis], date: datetime) -> str:
    content_parts = [
        "# Update Report",
        f"Generated on: {date.strftime('%Y-%m-%d')}\n",
        _generate_summary(analyses),
    ]
    content_parts.extend(_format_package(analysis) for analysis in analyses)
    return "\n".join(content_parts)


def render_breaking_changes_report(analyses: List[PackageAnalysis], date: datetime) -> str:
    content = ["# Breaking Changes Report", f"Generated on: {date.strftime('%Y-%m-%d')}\n"]

    affected = [analysis for analysis in analyses if analysis.breaking_changes()]
    if not affected:
        content.append(NO_BREAKING_CHANGES)
        return "\n".join(content)

    for analysis in affected:
        content.append(f"## {analysis.package_name} ({_format_versions(analysis)})\n")
        for note in analysis.categorized_notes:
            for sentence in note.categorized.breaking_change:
                content.append(f"- **{note.version}**: {sentence}")
        content.append("")

    return "\n".join(content)


async def report_renderer_node(state: AgentState) -> AgentState:
    """Render the update and breaking changes reports."""
    try:
        logger.info("Executing Report Renderer Node")

        analyses = state.get("analyses", [])
        date = state.get("generation_date") or datetime.now()

        rendered_report = RenderedReport(
            markdown=render_update_report(analyses, date),
            breaking_changes=render_breaking_changes_report(analyses, date),
            generation_date=date.isoformat(),
            metadata={
                "package_count": len(analyses),
                "breaking_change_count": sum(len(analysis.breaking_changes()) for analysis in analyses),
            },
        )

        state["rendered_report"] = rendered_report
        return state

    except Exception as e:
        logger.error(f"Error in Report Renderer: {str(e)}")
        state.setdefault("errors", []).append({"node": "report_renderer", "error": str(e), "timestamp": datetime.now()})
        return state
