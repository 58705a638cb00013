"""Tests for the analysis node."""

import pytest

from changesage.nodes import analysis_node as analysis_module
from changesage.nodes.analysis_node import analysis_node
from changesage.types.packages import CHANGELOG, UNKNOWN, PackageNotes
from changesage.types.state import AgentState


@pytest.fixture
def packages():
    return [
        PackageNotes(
            package_name="parser-lib",
            current_version="1.4.0",
            latest_version="2.0.0",
            changelog="## Breaking Changes\n- Support for Node 14 is discontinued and requires migration.\n",
        ),
        PackageNotes(package_name="quiet-lib"),
    ]


@pytest.mark.asyncio
async def test_analysis_node(packages):
    state = await analysis_node(AgentState(packages=packages, term_limit=5, errors=[]))

    analyses = state["analyses"]
    assert [a.package_name for a in analyses] == ["parser-lib", "quiet-lib"]
    assert analyses[0].log_source == CHANGELOG
    assert analyses[0].breaking_changes() == ["Support for Node 14 is discontinued and requires migration."]
    assert len(analyses[0].important_terms[0].terms) <= 5
    assert analyses[1].log_source == UNKNOWN
    assert state["errors"] == []


@pytest.mark.asyncio
async def test_failing_package_is_recorded(monkeypatch, packages):
    real = analysis_module.parse_included_package

    def flaky(package, term_limit):
        if package.package_name == "quiet-lib":
            raise RuntimeError("cannot parse")
        return real(package, term_limit)

    monkeypatch.setattr(analysis_module, "parse_included_package", flaky)
    state = await analysis_node(AgentState(packages=packages, errors=[]))

    assert [a.package_name for a in state["analyses"]] == ["parser-lib"]
    assert len(state["errors"]) == 1
    error = state["errors"][0]
    assert error["node"] == "analysis"
    assert error["package"] == "quiet-lib"
    assert error["error"] == "cannot parse"


@pytest.mark.asyncio
async def test_missing_packages_is_recorded():
    state = await analysis_node(AgentState(errors=[]))

    assert "analyses" not in state
    assert state["errors"][0]["node"] == "analysis"
