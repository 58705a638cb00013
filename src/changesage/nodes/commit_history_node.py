"""
ChangeSage commit history node: supplies a changelog from git history for
packages that ship neither release notes nor a CHANGELOG.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from git import Repo, Tag
from loguru import logger

from changesage.types.packages import PackageNotes
from changesage.types.state import AgentState

COMMITS_HEADING = "Commits"


def _get_release_tags(repo: Repo) -> List[Tag]:
    """Get all release tags sorted by version number (highest first)."""

    def version_key(tag: Tag) -> tuple:
        name = tag.name
        if name.startswith("v"):
            name = name[1:]
        try:
            parts = [int(x) for x in name.split(".")]
            return tuple(parts + [0] * (3 - len(parts)))
        except (ValueError, AttributeError):
            return (-1, -1, -1)

    return sorted(repo.tags, key=version_key, reverse=True)


def _find_tag(repo: Repo, version: Optional[str]) -> Optional[str]:
    """Find the tag for a version, with or without a leading "v"."""
    if not version:
        return None
    bare = version[1:] if version.startswith("v") else version
    names = {tag.name for tag in repo.tags}
    for candidate in (f"v{bare}", bare):
        if candidate in names:
            return candidate
    return None


def _get_commit_range(repo: Repo) -> Tuple[Optional[str], str]:
    """Automatically determine the commit range of the latest release."""
    tags = _get_release_tags(repo)

    if not tags:
        return None, "HEAD"

    latest_tag = tags[0]
    if repo.head.commit == latest_tag.commit:
        if len(tags) >= 2:
            return tags[1].name, latest_tag.name
        return None, latest_tag.name
    return latest_tag.name, "HEAD"


def _get_version_range(repo: Repo, package: PackageNotes) -> Tuple[Optional[str], str]:
    """Use the tags of the installed and latest versions, falling back to the automatic range."""
    start_ref = _find_tag(repo, package.current_version)
    end_ref = _find_tag(repo, package.latest_version)
    if start_ref and end_ref:
        return start_ref, end_ref
    return _get_commit_range(repo)


def _get_commit_subjects(repo: Repo, start_ref: Optional[str], end_ref: str) -> List[str]:
    """Retrieve the first line of every commit message in the range."""
    rev_range = f"{start_ref}..{end_ref}" if start_ref else end_ref
    subjects = []
    for commit in repo.iter_commits(rev_range):
        subject = commit.message.strip().splitlines()[0] if commit.message.strip() else ""
        if subject:
            subjects.append(subject)
    return subjects


def build_commit_changelog(repo_path: str, package: PackageNotes) -> Optional[str]:
    """Render a package's commit subjects as a markdown changelog."""
    repo = Repo(repo_path)
    start_ref, end_ref = _get_version_range(repo, package)
    subjects = _get_commit_subjects(repo, start_ref, end_ref)
    logger.debug(f"{package.package_name}: {len(subjects)} commits in {start_ref or 'root'}..{end_ref}")

    if not subjects:
        return None
    lines = [f"## {COMMITS_HEADING}"] + [f"- {subject}" for subject in subjects]
    return "\n".join(lines)


def needs_commit_history(package: PackageNotes) -> bool:
    return bool(package.repo_path) and not package.has_release_notes() and not package.changelog


def commit_history_node(state: AgentState) -> AgentState:
    """Fill in changelogs from local git history where nothing else is available."""
    if "packages" not in state:
        raise ValueError("packages is required in AgentState")

    logger.info("Executing Commit History Node")

    packages = []
    supplied = 0
    for package in state["packages"]:
        if not needs_commit_history(package):
            packages.append(package)
            continue
        try:
            changelog = build_commit_changelog(package.repo_path, package)
        except Exception as e:
            logger.error(f"Error reading commit history for {package.package_name}: {str(e)}")
            state.setdefault("errors", []).append(
                {
                    "node": "commit_history",
                    "package": package.package_name,
                    "error": str(e),
                    "timestamp": datetime.now(),
                }
            )
            packages.append(package)
            continue

        if changelog:
            supplied += 1
            package = package.model_copy(update={"changelog": changelog})
        packages.append(package)

    logger.info(f"Supplied commit history for {supplied} packages")
    return {**state, "packages": packages}
