"""
ChangeSage workflow state shared between nodes.
"""

from datetime import datetime
from typing import Any, Dict, List, TypedDict

from changesage.types.packages import PackageAnalysis, PackageNotes
from changesage.types.render import RenderedReport


class AgentState(TypedDict, total=False):
    """State container for the ChangeSage workflow.

    Using TypedDict for LangGraph compatibility. total=False means all fields
    are optional.
    """

    # Input
    packages: List[PackageNotes]  # Outdated packages and their raw change logs
    term_limit: int  # Number of salient terms to keep per version

    # Analysis Node Output
    analyses: List[PackageAnalysis]

    # Report Renderer Node Output
    rendered_report: RenderedReport

    # Global State
    generation_date: datetime
    errors: List[Dict[str, Any]]
    warnings: List[Dict[str, Any]]
