"""Assembles the model instruction from extracted report text."""

from collections.abc import Iterable
from functools import lru_cache

from medreport.processor.models import ExtractedDocument
from medreport.prompting.prompt_loader import load_json_schema, load_prompt_template

FILE_HEADER = "### FILE: {file_id}"
DOCUMENT_SEPARATOR = "\n\n---\n\n"


def join_documents(documents: Iterable[ExtractedDocument]) -> str:
    """Prefix each document with its file header and join them in order."""
    blocks = [
        f"{FILE_HEADER.format(file_id=doc.file_id)}\n{doc.text}".strip()
        for doc in documents
    ]
    return DOCUMENT_SEPARATOR.join(blocks)


@lru_cache(maxsize=1)
def _default_resources() -> tuple[str, str]:
    return load_prompt_template(), load_json_schema()


def build_prompt(joined_text: str) -> str:
    """Render the analysis instruction with the joined report text at the end.

    The text is embedded verbatim; no truncation happens here.
    """
    template, schema = _default_resources()
    return template.format(json_schema=schema, report_text=joined_text).rstrip() + "\n"
