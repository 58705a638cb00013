"""ChangeSage workflow integration using LangGraph for orchestration."""

import argparse
import asyncio
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from langgraph.graph import END, StateGraph
from loguru import logger

from changesage.nodes.analysis_node import DEFAULT_TERM_LIMIT, analysis_node
from changesage.nodes.commit_history_node import commit_history_node
from changesage.nodes.report_renderer_node import report_renderer_node
from changesage.types.packages import PackageNotes
from changesage.types.state import AgentState

CHANGELOG_SUFFIXES = (".md", ".markdown", ".txt")


def create_workflow(config: Dict[str, Any]) -> StateGraph:
    """Create the ChangeSage workflow graph."""
    workflow = StateGraph(AgentState)

    workflow.add_node("commit_history_node", commit_history_node)
    workflow.add_node("analysis_node", analysis_node)
    workflow.add_node("report_renderer_node", report_renderer_node)

    workflow.set_entry_point("commit_history_node")

    workflow.add_edge("commit_history_node", "analysis_node")
    workflow.add_edge("analysis_node", "report_renderer_node")
    workflow.add_edge("report_renderer_node", END)

    return workflow.compile()


async def run_workflow_async(config: Dict[str, Any]) -> AgentState:
    """Run the ChangeSage workflow asynchronously and return the final state."""
    initial_state: AgentState = {
        "packages": config["packages"],
        "term_limit": config.get("term_limit", DEFAULT_TERM_LIMIT),
        "generation_date": datetime.now(),
        "errors": [],
        "warnings": [],
    }

    app = create_workflow(config)
    final_state = await app.ainvoke(initial_state)
    if final_state.get("errors"):
        logger.error(f"Errors encountered: {final_state['errors']}")
    return final_state


def run_workflow(config: Dict[str, Any]) -> AgentState:
    """Synchronous wrapper for the async workflow."""
    return asyncio.run(run_workflow_async(config))


def _load_changelog_file(path: Path) -> PackageNotes:
    return PackageNotes(package_name=path.stem, changelog=path.read_text(encoding="utf-8"))


def load_packages(path: str) -> List[PackageNotes]:
    """Load packages from a JSON file, a single changelog file or a directory of changelogs."""
    source = Path(path)
    if source.is_dir():
        return [
            _load_changelog_file(child)
            for child in sorted(source.iterdir())
            if child.is_file() and child.suffix.lower() in CHANGELOG_SUFFIXES
        ]
    if not source.is_file():
        raise FileNotFoundError(f"Input not found: {path}")

    if source.suffix.lower() == ".json":
        data = json.loads(source.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("packages", [data])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of packages in {path}")
        return [PackageNotes.model_validate(item) for item in data]

    return [_load_changelog_file(source)]


def write_reports(final_state: AgentState, output_dir: str) -> List[str]:
    """Write every rendered report into the output directory."""
    written = []
    rendered_report = final_state.get("rendered_report")
    if not rendered_report:
        return written

    os.makedirs(output_dir, exist_ok=True)
    for filename, content in rendered_report.get_documents().items():
        filepath = os.path.join(output_dir, filename)
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(content)
            logger.info(f"Report saved to: {filepath}")
            written.append(filepath)
        except Exception as e:
            logger.error(f"Failed to save report {filepath}: {str(e)}")
    return written


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Categorize dependency release notes using ChangeSage")
    parser.add_argument("input", type=str, help="JSON package file, changelog file or directory of changelogs")
    parser.add_argument(
        "--output-dir",
        type=str,
        help="Output directory for reports",
        default=os.getenv("CHANGESAGE_OUTPUT_DIR", "reports"),
    )
    parser.add_argument(
        "--term-limit",
        type=int,
        help="Number of key terms to keep per version",
        default=int(os.getenv("CHANGESAGE_TERM_LIMIT", str(DEFAULT_TERM_LIMIT))),
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else os.getenv("CHANGESAGE_LOG_LEVEL", "INFO"))

    try:
        packages = load_packages(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load packages: {str(e)}")
        sys.exit(1)

    config = {
        "packages": packages,
        "term_limit": args.term_limit,
        "output_dir": args.output_dir,
    }

    logger.info(f"Analyzing {len(packages)} packages from: {os.path.abspath(args.input)}")
    final_state = run_workflow(config)

    logger.info("Workflow completed!")
    analyses = final_state.get("analyses", [])
    logger.info(f"Analyzed {len(analyses)} packages")
    logger.info(f"Found {sum(len(a.breaking_changes()) for a in analyses)} breaking changes")

    write_reports(final_state, args.output_dir)

    if final_state.get("errors"):
        logger.error("Errors encountered during processing:")
        for error in final_state["errors"]:
            logger.error(f"- {error['node']}: {error['error']}")
        sys.exit(1)


if __name__ == "__main__":
    main()
