"""Text cleanup shared by every extraction strategy."""

import re

from medreport.extraction.exceptions import EmptyDocumentError

DEFAULT_MIN_TEXT_LENGTH = 10

_TRAILING_SPACES = re.compile(r"[ \t]+\n")
_BLANK_RUNS = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Unify line endings, drop trailing spaces and collapse blank-line runs."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _TRAILING_SPACES.sub("\n", text)
    text = _BLANK_RUNS.sub("\n\n", text)
    return text.strip()


def finalize_text(
    raw: str,
    *,
    source: str,
    min_length: int = DEFAULT_MIN_TEXT_LENGTH,
) -> str:
    """Normalize extracted text and reject documents with too little content.

    Raises:
        EmptyDocumentError: if fewer than ``min_length`` characters remain.
    """
    text = normalize_text(raw)
    if len(text) < min_length:
        raise EmptyDocumentError(f"{source} appears to be empty or contains no readable text")
    return text
