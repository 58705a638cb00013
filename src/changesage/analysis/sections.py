"""Split markdown release notes into headed sections of sentences and list items."""

import re
from typing import Dict, Iterable, List, Optional

from loguru import logger

from changesage.types.packages import LogMetadata

ATX_HEADING = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)\s*#*\s*$")
SETEXT_UNDERLINE = re.compile(r"^\s{0,3}(=+|-+)\s*$")
LIST_ITEM = re.compile(r"^(\s*)([-*+]|\d+[.)])\s+(.*)$")
TASK_BOX = re.compile(r"^\[[ xX]\]\s+")
TABLE_ROW = re.compile(r"^\s*\|(.+)\|\s*$")
TABLE_SEPARATOR = re.compile(r"^[\s|:\-]+$")
HORIZONTAL_RULE = re.compile(r"^\s{0,3}([-*_])(\s*\1){2,}\s*$")
FENCE = re.compile(r"^\s*(```|~~~)")

IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")
HTML_TAG = re.compile(r"<[^>]+>")
EMPHASIS = re.compile(r"(\*\*|\*|~~)(?=\S)(.+?)(?<=\S)\1")
UNDERSCORE_EMPHASIS = re.compile(r"(?<!\w)(__|_)(?=\S)(.+?)(?<=\S)\1(?!\w)")
INLINE_CODE = re.compile(r"`([^`]*)`")

REFERENCE = re.compile(r"(?<![\w#])#\d+\b|\bPR\s?#?\d+\b")
MENTION = re.compile(r"(?<![\w.])@[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})\b")
URL = re.compile(r"\bhttps?://[^\s()<>]+[^\s()<>.,;:!?'\"]")

PREAMBLE = ""


def clean_inline(text: str) -> str:
    """Strip inline markdown and HTML down to plain text."""
    text = IMAGE.sub(r"\1", text)
    text = LINK.sub(r"\1", text)
    text = HTML_TAG.sub("", text)
    text = INLINE_CODE.sub(r"\1", text)
    text = EMPHASIS.sub(r"\2", text)
    text = UNDERSCORE_EMPHASIS.sub(r"\2", text)
    return re.sub(r"\s+", " ", text).strip()


class _SectionBuilder:
    """Accumulates items for the current heading."""

    def __init__(self):
        self.sections: Dict[str, List[str]] = {}
        self.heading: str = PREAMBLE
        self.paragraph: List[str] = []
        self.list_item: Optional[List[str]] = None

    def add_item(self, text: str) -> None:
        text = clean_inline(text)
        if not text:
            return
        self.sections.setdefault(self.heading, []).append(text)

    def flush(self) -> None:
        if self.list_item is not None:
            self.add_item(" ".join(self.list_item))
            self.list_item = None
        if self.paragraph:
            self.add_item(" ".join(self.paragraph))
            self.paragraph = []

    def start_heading(self, heading: str) -> None:
        self.flush()
        self.heading = clean_inline(heading)
        self.sections.setdefault(self.heading, [])


def parse_sections(markdown: str) -> Dict[str, List[str]]:
    """Parse markdown into {heading: [items]}.

    List items (nested ones flattened), paragraphs and table cells become
    items. Fenced code is skipped. Text before the first heading is kept under
    the empty heading, and repeated headings accumulate.
    """
    if not markdown or not isinstance(markdown, str):
        logger.warning("Invalid or empty markdown content passed to parse_sections.")
        return {}

    builder = _SectionBuilder()
    in_fence = False

    for line in markdown.splitlines():
        if FENCE.match(line):
            builder.flush()
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        if not line.strip():
            builder.flush()
            continue

        heading = ATX_HEADING.match(line)
        if heading:
            builder.start_heading(heading.group(2))
            continue

        if SETEXT_UNDERLINE.match(line) and len(builder.paragraph) == 1 and builder.list_item is None:
            title = builder.paragraph.pop()
            builder.start_heading(title)
            continue

        if HORIZONTAL_RULE.match(line):
            builder.flush()
            continue

        item = LIST_ITEM.match(line)
        if item:
            builder.flush()
            builder.list_item = [TASK_BOX.sub("", item.group(3))]
            continue

        row = TABLE_ROW.match(line)
        if row:
            builder.flush()
            if TABLE_SEPARATOR.match(row.group(1)):
                continue
            for cell in row.group(1).split("|"):
                builder.add_item(cell)
            continue

        if builder.list_item is not None:
            builder.list_item.append(line.strip())
        else:
            builder.paragraph.append(line.strip())

    builder.flush()

    sections = builder.sections
    if PREAMBLE in sections and not sections[PREAMBLE]:
        del sections[PREAMBLE]

    logger.debug(f"Parsed {len(sections)} sections")
    return sections


def _unique(matches: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(matches))


def extract_metadata(markdown: str) -> LogMetadata:
    """Collect issue/PR references, @mentions and URLs from raw markdown."""
    if not markdown:
        return LogMetadata()
    return LogMetadata(
        references=_unique(m.group(0) for m in REFERENCE.finditer(markdown)),
        mentions=_unique(MENTION.findall(markdown)),
        urls=_unique(m.group(0) for m in URL.finditer(markdown)),
    )
