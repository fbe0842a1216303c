"""Template rendering engine for postpress.

This module uses Jinja2 to compose final pages. Two templates are used:
``post.html`` for individual posts and ``home.html`` for the homepage.

Placeholders that the data does not supply render as empty strings,
including attribute chains such as ``{{ author.name }}``.

Key class:
- TemplateEngine: Loads the templates and renders posts and the homepage.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from jinja2 import ChainableUndefined, Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from pygments.formatters import HtmlFormatter

from .content import ListingEntry, RenderedPost

POST_TEMPLATE = "post.html"
HOME_TEMPLATE = "home.html"


def merge_context(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge mappings into one template context.

    Later layers take precedence over earlier ones for the same key.

    Args:
        *layers: Mappings such as front matter or well-known fields.

    Returns:
        A new dictionary suitable as template context.
    """
    context: dict[str, Any] = {}
    for layer in layers:
        context.update(layer)
    return context


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        templates_dir: Directory containing ``post.html`` and ``home.html``.
        env: Jinja2 environment.
    """

    def __init__(self, templates_dir: Path):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with templates.
        """
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=ChainableUndefined,
            keep_trailing_newline=True,
        )
        self.env.globals["pygments_css"] = self._pygments_css

    @staticmethod
    def _pygments_css() -> Markup:
        """Return Pygments CSS styles for syntax highlighting.

        Returns:
            CSS string for the .highlight class.
        """
        return Markup(HtmlFormatter().get_style_defs(".highlight"))

    def load(self) -> None:
        """Load and compile both templates.

        Raises:
            jinja2.TemplateNotFound: If a template file is missing.
            jinja2.TemplateSyntaxError: If a template cannot be compiled.
        """
        for name in (POST_TEMPLATE, HOME_TEMPLATE):
            self.env.get_template(name)

    def post_context(self, post: RenderedPost) -> dict[str, Any]:
        return merge_context(post.post.front, {"markdown_html": Markup(post.html)})

    def home_context(self, entries: Sequence[ListingEntry]) -> dict[str, Any]:
        return {
            "post_excerpts": [
                merge_context({"url": entry.url, "excerpt": entry.excerpt}, entry.metadata)
                for entry in entries
            ]
        }

    def render_post(self, post: RenderedPost) -> str:
        """Render a post page.

        Args:
            post: Rendered post.

        Returns:
            Final HTML document.
        """
        template = self.env.get_template(POST_TEMPLATE)
        return template.render(self.post_context(post))

    def render_home(self, entries: Sequence[ListingEntry]) -> str:
        """Render the homepage.

        Args:
            entries: Listing entries, most recent first.

        Returns:
            Final HTML document.
        """
        template = self.env.get_template(HOME_TEMPLATE)
        return template.render(self.home_context(entries))
