"""Protocol definitions for postpress.

The builder and content loader depend on these interfaces rather than on
the concrete mistune and Jinja2 implementations, so either side can be
replaced in tests or by an alternative engine.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import ListingEntry, RenderedPost


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering post bodies to HTML."""

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def render(self, content: str) -> str:
        """Render content to HTML.

        Args:
            content: Source content to render.

        Returns:
            Rendered HTML.
        """
        ...


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for composing final pages from templates."""

    @abstractmethod
    def render_post(self, post: RenderedPost) -> str:
        """Render a single post page.

        Args:
            post: Rendered post to place in the post template.

        Returns:
            Final HTML document.
        """
        ...

    @abstractmethod
    def render_home(self, entries: Sequence[ListingEntry]) -> str:
        """Render the homepage listing.

        Args:
            entries: Listing entries, most recent first.

        Returns:
            Final HTML document.
        """
        ...
