"""Types for rendered reports."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class RenderedReport:
    """Markdown reports produced for a set of analyzed packages."""

    markdown: str
    breaking_changes: str
    generation_date: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_documents(self) -> Dict[str, str]:
        """Map report file names to their content."""
        return {
            "update-report.md": self.markdown,
            "breaking-changes-report.md": self.breaking_changes,
        }

    def get_report_names(self) -> List[str]:
        return list(self.get_documents())
