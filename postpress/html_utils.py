"""HTML utility functions for postpress.

This module provides HTML manipulation utilities: escaping text for
inclusion in markup and reducing rendered HTML to plain text.

Functions:
    escape_html: Escape special HTML characters in a string.
    html_to_text: Strip all markup from an HTML fragment.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

# Elements whose text never reaches the reader
_INVISIBLE_TAGS = ["script", "style", "template"]


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Converts the following characters to their HTML entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;

    Args:
        text: The string to escape.

    Returns:
        The escaped string, safe for inclusion in HTML.

    Examples:
        >>> escape_html('<script>alert("XSS")</script>')
        '&lt;script&gt;alert(&quot;XSS&quot;)&lt;/script&gt;'

        >>> escape_html('Tom & Jerry')
        'Tom &amp; Jerry'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def html_to_text(html: str) -> str:
    """Strip all markup from HTML, keeping the readable text.

    Entities are decoded and the contents of script and style elements
    are dropped. Whitespace is left as found in the source.

    Args:
        html: HTML fragment or document.

    Returns:
        Plain text content.

    Examples:
        >>> html_to_text("<p>Tom &amp; <em>Jerry</em></p>")
        'Tom & Jerry'
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_INVISIBLE_TAGS):
        tag.decompose()
    return soup.get_text()
