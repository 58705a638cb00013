"""Types describing a package's raw change logs and the results of analyzing them."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from changesage.types.categories import CategorizedResults

UNKNOWN = "UNKNOWN"
SKIPPED = "SKIPPED"
ALL = "ALL"
CHANGELOG = "CHANGELOG"
RELEASE_NOTES = "RELEASE_NOTES"


class ReleaseNote(BaseModel):
    """Release notes published for a single version."""

    notes: str = Field("", description="Raw markdown body of the release")
    version: str = Field(ALL, description="Version the notes belong to")
    published_at: Optional[str] = Field(None, description="Publication timestamp, if known")


class PackageNotes(BaseModel):
    """Raw change log material fetched for one outdated dependency."""

    package_name: str = Field(..., description="npm package name")
    current_version: Optional[str] = Field(None, description="Installed version")
    latest_version: Optional[str] = Field(None, description="Version being considered")
    release_notes: Union[List[ReleaseNote], str] = Field(
        default_factory=list, description="Per-version release notes, or an UNKNOWN/SKIPPED marker"
    )
    changelog: Optional[str] = Field(None, description="Full CHANGELOG text")
    repo_path: Optional[str] = Field(None, description="Local clone used for commit history")

    def has_release_notes(self) -> bool:
        """Check whether usable per-version release notes are present."""
        if isinstance(self.release_notes, str):
            return False
        return bool(self.release_notes)


@dataclass
class TermRanking:
    """A salient term and its TF-IDF score."""

    term: str
    score: float


@dataclass
class LogMetadata:
    """References extracted from raw release note text."""

    references: List[str] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)


@dataclass
class ImportantTerms:
    """Ranked terms for one version's notes."""

    version: str
    published_at: str
    terms: List[TermRanking]


@dataclass
class CategorizedNote:
    """Categorized sentences for one version's notes."""

    version: str
    published_at: str
    categorized: CategorizedResults
    log_metadata: LogMetadata
    log_source: str


@dataclass
class PackageAnalysis:
    """Everything learned about one package's change logs."""

    package_name: str
    log_source: str
    important_terms: List[ImportantTerms] = field(default_factory=list)
    categorized_notes: List[CategorizedNote] = field(default_factory=list)
    current_version: Optional[str] = None
    latest_version: Optional[str] = None

    def breaking_changes(self) -> List[str]:
        """Collect breaking changes across all analyzed versions."""
        found: List[str] = []
        for note in self.categorized_notes:
            found.extend(note.categorized.breaking_change)
        return found
