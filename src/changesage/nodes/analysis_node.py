"""Analysis Node: categorizes the release notes of every package concurrently."""

import asyncio
from datetime import datetime

from loguru import logger

from changesage.analysis.package_parser import parse_included_package
from changesage.types.state import AgentState

DEFAULT_TERM_LIMIT = 10


async def analysis_node(state: AgentState) -> AgentState:
    """Run the package parser for each package and collect the analyses."""
    try:
        if "packages" not in state:
            raise ValueError("packages is required in AgentState")

        logger.info("Executing Analysis Node")

        packages = state["packages"]
        term_limit = state.get("term_limit", DEFAULT_TERM_LIMIT)
        results = await asyncio.gather(
            *(asyncio.to_thread(parse_included_package, package, term_limit) for package in packages),
            return_exceptions=True,
        )

        analyses = []
        for package, result in zip(packages, results):
            if isinstance(result, Exception):
                logger.error(f"Error analyzing {package.package_name}: {str(result)}")
                state.setdefault("errors", []).append(
                    {
                        "node": "analysis",
                        "package": package.package_name,
                        "error": str(result),
                        "timestamp": datetime.now(),
                    }
                )
                continue
            analyses.append(result)

        logger.info(f"Analyzed {len(analyses)} of {len(packages)} packages")
        state["analyses"] = analyses
        return state

    except Exception as e:
        logger.error(f"Error in Analysis Node: {str(e)}")
        state.setdefault("errors", []).append({"node": "analysis", "error": str(e), "timestamp": datetime.now()})
        return state
