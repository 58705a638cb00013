"""Tests for the commit history node."""

from pathlib import Path

import pytest
from git import Repo

from changesage.nodes.commit_history_node import build_commit_changelog, commit_history_node, needs_commit_history
from changesage.types.packages import PackageNotes, ReleaseNote
from changesage.types.state import AgentState


def create_commit(repo: Repo, file_path: Path, content: str, message: str) -> None:
    """Helper function to create a commit in the test repository."""
    file_path.write_text(content)
    repo.index.add([str(file_path.relative_to(file_path.parent))])
    return repo.index.commit(message)


@pytest.fixture
def temp_git_repo(tmp_path):
    """Create a basic temporary Git repository."""
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()
    return Repo.init(repo_path)


@pytest.fixture
def initial_repo(temp_git_repo):
    """Repository with just commits, no tags yet."""
    repo = temp_git_repo
    repo_path = Path(repo.working_dir)
    test_file = repo_path / "test.txt"

    create_commit(repo, test_file, "Initial content", "Initial commit")
    create_commit(repo, test_file, "Feature A", "Add feature A")

    return repo_path


@pytest.fixture
def multi_tag_unreleased_repo(temp_git_repo):
    """Repository with three tags and unreleased changes."""
    repo = temp_git_repo
    repo_path = Path(repo.working_dir)
    test_file = repo_path / "test.txt"

    create_commit(repo, test_file, "Initial content", "Initial commit")
    repo.create_tag("v1.0.0")

    create_commit(repo, test_file, "Feature A", "Add feature A\n\nLonger description body")
    repo.create_tag("v1.1.0")

    create_commit(repo, test_file, "Fix B", "Fix bug B")
    repo.create_tag("1.2.0")

    create_commit(repo, test_file, "Feature C", "Add feature C")

    return repo_path


def test_needs_commit_history():
    assert needs_commit_history(PackageNotes(package_name="a", repo_path="/tmp/a"))
    assert not needs_commit_history(PackageNotes(package_name="a"))
    assert not needs_commit_history(PackageNotes(package_name="a", repo_path="/tmp/a", changelog="## Fixes"))
    assert not needs_commit_history(
        PackageNotes(package_name="a", repo_path="/tmp/a", release_notes=[ReleaseNote(notes="x")])
    )


def test_version_tag_range(multi_tag_unreleased_repo):
    package = PackageNotes(package_name="lib", current_version="1.0.0", latest_version="v1.2.0")
    changelog = build_commit_changelog(str(multi_tag_unreleased_repo), package)
    assert changelog == "## Commits\n- Fix bug B\n- Add feature A"


def test_falls_back_to_unreleased_changes(multi_tag_unreleased_repo):
    package = PackageNotes(package_name="lib", current_version="0.9.0", latest_version="2.0.0")
    changelog = build_commit_changelog(str(multi_tag_unreleased_repo), package)
    assert changelog == "## Commits\n- Add feature C"


def test_untagged_repo_uses_all_commits(initial_repo):
    changelog = build_commit_changelog(str(initial_repo), PackageNotes(package_name="lib"))
    assert changelog == "## Commits\n- Add feature A\n- Initial commit"


def test_node_supplies_changelogs(multi_tag_unreleased_repo):
    with_notes = PackageNotes(package_name="documented", changelog="## Fixes\n- Fixed a bug\n")
    from_git = PackageNotes(
        package_name="lib",
        current_version="1.1.0",
        latest_version="1.2.0",
        repo_path=str(multi_tag_unreleased_repo),
    )

    state = commit_history_node(AgentState(packages=[with_notes, from_git], errors=[]))

    assert state["packages"][0] is with_notes
    assert state["packages"][1].changelog == "## Commits\n- Fix bug B"
    assert from_git.changelog is None
    assert state["errors"] == []


def test_node_records_repository_errors(tmp_path):
    package = PackageNotes(package_name="ghost", repo_path=str(tmp_path / "missing"))

    state = commit_history_node(AgentState(packages=[package], errors=[]))

    assert state["packages"] == [package]
    assert len(state["errors"]) == 1
    assert state["errors"][0]["node"] == "commit_history"
    assert state["errors"][0]["package"] == "ghost"


def test_node_requires_packages():
    with pytest.raises(ValueError):
        commit_history_node(AgentState())
