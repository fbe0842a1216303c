"""Metadata and excerpt extractors for postpress.

This module splits a raw post document into its YAML front matter and
markdown body, and derives the plain-text excerpt shown on the homepage.

Key functions:
- extract_frontmatter: Split raw text into (metadata, body).
- load_front: Metadata plus the body under the reserved CONTENT_KEY.
- excerpt: First EXCERPT_WORDS words of rendered HTML as plain text.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from .html_utils import html_to_text

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

# Reserved key holding the body in the mapping returned by load_front
CONTENT_KEY = "__content"

EXCERPT_WORDS = 30


class FrontMatterError(ValueError):
    """Raised when a document's front matter cannot be parsed.

    Attributes:
        line: 1-based line of the problem within the document, if known.
        column: 1-based column of the problem, if known.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    A document that does not open with a ``---`` line has no front matter
    and is returned whole as the body.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).

    Raises:
        FrontMatterError: If the YAML block is malformed or is not a mapping.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        problem = getattr(exc, "problem", None) or str(exc)
        if mark is not None:
            # Offset by one for the opening --- line
            raise FrontMatterError(
                f"Invalid front matter: {problem}", mark.line + 2, mark.column + 1
            ) from exc
        raise FrontMatterError(f"Invalid front matter: {problem}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end() :]


def load_front(text: str) -> dict[str, Any]:
    """Parse a document into its metadata fields plus its body.

    Args:
        text: Raw file content.

    Returns:
        Dictionary of all front matter fields, with the remaining body
        stored under CONTENT_KEY.
    """
    frontmatter, body = extract_frontmatter(text)
    result = dict(frontmatter)
    result[CONTENT_KEY] = body
    return result


def excerpt(html: str, words: int = EXCERPT_WORDS) -> str:
    """Summarize rendered HTML as its first few words of plain text.

    Args:
        html: Rendered HTML.
        words: Maximum number of whitespace-separated words to keep.

    Returns:
        The leading words joined by single spaces.
    """
    tokens = html_to_text(html).split()
    return " ".join(tokens[:words])
