"""Text normalization applied to sentences and section headings before matching."""

import re
import unicodedata
from typing import List

_QUOTES = str.maketrans({"‘": "'", "’": "'", "“": '"', "”": '"', "–": "-", "—": "-"})

_ACRONYM = re.compile(r"\b(?:[A-Za-z]\.){2,}")

# Order matters: irregular forms before the generic suffixes
_CONTRACTIONS = [
    (re.compile(r"\bcan't\b"), "cannot"),
    (re.compile(r"\bwon't\b"), "will not"),
    (re.compile(r"\bshan't\b"), "shall not"),
    (re.compile(r"n't\b"), " not"),
    (re.compile(r"'re\b"), " are"),
    (re.compile(r"'ll\b"), " will"),
    (re.compile(r"'ve\b"), " have"),
    (re.compile(r"\bi'm\b"), "i am"),
    (re.compile(r"\b(it|that|there|what)'s\b"), r"\1 is"),
]

_PUNCTUATION = re.compile(r"[,;:!?\"…]")
_TRAILING_PERIOD = re.compile(r"\.+(?=\s|$)")
_WHITESPACE = re.compile(r"\s+")
_TOKEN = re.compile(r"[\w#@][\w\-]*")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_text(text: str) -> str:
    """Normalize unicode, case, punctuation, contractions and acronyms."""
    if not text:
        return ""

    text = _strip_accents(text).translate(_QUOTES)
    text = _ACRONYM.sub(lambda m: m.group(0).replace(".", ""), text)
    text = text.lower()

    for pattern, replacement in _CONTRACTIONS:
        text = pattern.sub(replacement, text)

    text = _PUNCTUATION.sub(" ", text)
    text = _TRAILING_PERIOD.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> List[str]:
    """Split normalized text into word tokens. Hyphenated words stay whole."""
    return [token.strip("-") for token in _TOKEN.findall(text) if token.strip("-")]
