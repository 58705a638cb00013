"""Turn one package's raw release notes or changelog into a PackageAnalysis."""

from typing import List, Tuple

from loguru import logger

from changesage.analysis.orchestrator import analyze_log_categorization
from changesage.analysis.sections import extract_metadata, parse_sections
from changesage.analysis.tfidf import compute_tfidf_rankings
from changesage.nlp.lexicon import DEFAULT_LEXICON, Lexicon
from changesage.types.packages import (
    ALL,
    CHANGELOG,
    RELEASE_NOTES,
    UNKNOWN,
    CategorizedNote,
    ImportantTerms,
    PackageAnalysis,
    PackageNotes,
    ReleaseNote,
)


def select_notes(package: PackageNotes) -> Tuple[str, List[ReleaseNote]]:
    """Pick the log source for a package: release notes, then changelog, else nothing."""
    if package.has_release_notes():
        return RELEASE_NOTES, list(package.release_notes)
    if package.changelog and package.changelog.strip():
        return CHANGELOG, [ReleaseNote(notes=package.changelog, version=ALL)]
    return UNKNOWN, []


def parse_included_package(
    package: PackageNotes,
    term_limit: int = 10,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> PackageAnalysis:
    """Parse, rank and categorize every note of a package."""
    log_source, notes = select_notes(package)
    analysis = PackageAnalysis(
        package_name=package.package_name,
        log_source=log_source,
        current_version=package.current_version,
        latest_version=package.latest_version,
    )

    if not notes:
        logger.info(f"{package.package_name}: no release notes or changelog available")
        return analysis

    for note in notes:
        version = note.version or ALL
        published_at = note.published_at or UNKNOWN
        try:
            sections = parse_sections(note.notes)
            metadata = extract_metadata(note.notes)
            terms = compute_tfidf_rankings(sections, term_limit=term_limit)
            categorized = analyze_log_categorization(sections, lexicon, package.package_name)
        except Exception as e:
            logger.error(f"Error processing notes for {package.package_name} [{version}]: {str(e)}")
            continue

        analysis.important_terms.append(ImportantTerms(version=version, published_at=published_at, terms=terms))
        analysis.categorized_notes.append(
            CategorizedNote(
                version=version,
                published_at=published_at,
                categorized=categorized,
                log_metadata=metadata,
                log_source=log_source,
            )
        )

    logger.debug(
        f"{package.package_name}: analyzed {len(analysis.categorized_notes)} of {len(notes)} notes from {log_source}"
    )
    return analysis
