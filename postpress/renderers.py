"""Markdown rendering for postpress.

This module converts post bodies to HTML with mistune. Rendering is driven
by an explicit, immutable MarkdownOptions value so every render call sees
the same configuration. Typographic replacement runs over the finished
HTML with smartypants, which leaves tags and code untouched.

Key classes:
- MarkdownOptions: Frozen rendering configuration.
- MarkdownRenderer: Renders Markdown to HTML with syntax highlighting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import mistune
import smartypants
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .html_utils import escape_html

# Quotes, old school dashes (-- en, --- em), ellipses; &quot; counts as a quote
SMARTYPANTS_ATTR = (
    smartypants.Attr.q | smartypants.Attr.D | smartypants.Attr.e | smartypants.Attr.w
)

# Placeholder for HTML held back from smartypants
_STASH_MARK = "\x02{}\x03"
_STASH_RE = re.compile("\x02(\\d+)\x03")


@dataclass(frozen=True)
class MarkdownOptions:
    """Markdown rendering configuration.

    Attributes:
        html: Pass raw HTML in the source through unescaped.
        lang_prefix: Class prefix for the language of fenced code blocks.
        linkify: Turn bare URLs into links.
        typographer: Apply smart quotes and other typographic replacements.
    """

    html: bool = True
    lang_prefix: str = "language-"
    linkify: bool = True
    typographer: bool = True

    @property
    def plugins(self) -> list[str]:
        """Return the mistune plugins enabled by these options."""
        plugins = ["strikethrough", "table"]
        if self.linkify:
            plugins.append("url")
        return plugins


class _HighlightRenderer(mistune.HTMLRenderer):
    """Custom Markdown renderer with typography and syntax highlighting.

    Attributes:
        options: Rendering configuration.
    """

    def __init__(self, options: MarkdownOptions):
        super().__init__(escape=not options.html)
        self.options = options
        self._stash: list[str] = []

    def link(self, text: str, url: str, title: str | None = None) -> str:
        html = super().link(text, url, title)
        if self.options.typographer and text == url:
            # Autolinked URLs keep their literal text
            self._stash.append(html)
            return _STASH_MARK.format(len(self._stash) - 1)
        return html

    def finalize(self, html: str) -> str:
        """Apply typographic replacements to rendered HTML.

        Args:
            html: Output of the Markdown parser.

        Returns:
            HTML with smart quotes, dashes and ellipses, links restored.
        """
        if not self.options.typographer:
            return html
        html = smartypants.smartypants(html, SMARTYPANTS_ATTR)
        return _STASH_RE.sub(lambda m: self._stash[int(m.group(1))], html)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Info string of the fence; its first word is the language.

        Returns:
            HTML string with highlighted code.
        """
        lang = info.split(None, 1)[0] if info and info.strip() else ""
        lang_class = f"{self.options.lang_prefix}{lang}"
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(cssclass=f"highlight {lang_class}")
                return highlight(code, lexer, formatter)
        attr = f' class="{escape_html(lang_class)}"' if lang else ""
        return f"<pre><code{attr}>{escape_html(code)}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    A fresh mistune parser is created for each call, so one renderer can be
    shared by concurrent workers.

    Attributes:
        options: Rendering configuration applied to every call.
    """

    def __init__(self, options: MarkdownOptions | None = None):
        self.options = options or MarkdownOptions()

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a Markdown file.
        """
        return path.suffix.lower() == ".md"

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Rendered HTML.
        """
        renderer = _HighlightRenderer(self.options)
        markdown = mistune.create_markdown(
            renderer=renderer, plugins=self.options.plugins
        )
        return renderer.finalize(markdown(content))
