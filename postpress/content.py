"""Content processing for postpress.

This module discovers post files, parses them into Post objects and
renders their bodies. It also defines the records handed to the
template layer.

Key classes:
- Post: A parsed source document (front matter plus markdown body).
- RenderedPost: A Post together with its rendered HTML body.
- ListingEntry: One post as shown on the homepage.
- PostLoader: Discovers and loads post files from the posts directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .extractors import CONTENT_KEY, excerpt, load_front
from .protocols import ContentRenderer
from .utils import output_filename

# Output subdirectory (and URL segment) for post pages
POSTS_URL_DIR = "posts"


@dataclass(frozen=True)
class Post:
    """Represents a single source post.

    Attributes:
        name: File name of the source, e.g. ``2020-01-01-title.md``.
        path: Path to the source file.
        metadata: Front matter fields in document order.
        body: Markdown body following the front matter.
    """

    name: str
    path: Path
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_text(cls, path: Path, text: str) -> Post:
        """Parse raw file content into a Post.

        Raises:
            FrontMatterError: If the front matter is malformed.
        """
        front = load_front(text)
        body = front.pop(CONTENT_KEY)
        return cls(name=path.name, path=path, metadata=front, body=body)

    @property
    def title(self) -> Any:
        return self.metadata.get("title")

    @property
    def date(self) -> Any:
        return self.metadata.get("date")

    @property
    def front(self) -> dict[str, Any]:
        """Front matter fields with the body under CONTENT_KEY."""
        return {**self.metadata, CONTENT_KEY: self.body}

    @property
    def extra(self) -> dict[str, Any]:
        """Front matter fields other than title and date."""
        return {
            key: value
            for key, value in self.metadata.items()
            if key not in ("title", "date")
        }


@dataclass(frozen=True)
class RenderedPost:
    """A post with its body rendered to HTML.

    Attributes:
        post: The source post.
        html: Rendered HTML body.
    """

    post: Post
    html: str

    @property
    def metadata(self) -> dict[str, Any]:
        return self.post.metadata

    @property
    def output_name(self) -> str:
        return output_filename(self.post.name)

    @property
    def url(self) -> str:
        return f"/{POSTS_URL_DIR}/{self.output_name}"


@dataclass(frozen=True)
class ListingEntry:
    """One post as listed on the homepage.

    Attributes:
        url: Site-relative URL of the post page.
        excerpt: Plain-text summary of the post.
        metadata: Front matter fields of the post, with the markdown body
            under CONTENT_KEY.
    """

    url: str
    excerpt: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_rendered(cls, rendered: RenderedPost) -> ListingEntry:
        """Build an entry from an already rendered post, without re-parsing."""
        return cls(
            url=rendered.url,
            excerpt=excerpt(rendered.html),
            metadata=rendered.post.front,
        )


class PostLoader:
    """Discovers and loads posts from a flat directory.

    Attributes:
        posts_dir: Directory containing post files.
        renderer: Renderer used for post bodies and to select files.
    """

    def __init__(self, posts_dir: Path, renderer: ContentRenderer):
        """Initialize the loader.

        Args:
            posts_dir: Path to the posts directory.
            renderer: Content renderer for post bodies.
        """
        self.posts_dir = posts_dir
        self.renderer = renderer

    def iter_files(self) -> list[Path]:
        """List post files in name order.

        Subdirectories and hidden files are skipped.

        Returns:
            Sorted list of paths to post files.

        Raises:
            FileNotFoundError: If the posts directory does not exist.
        """
        files = [
            path
            for path in self.posts_dir.iterdir()
            if path.is_file()
            and not path.name.startswith(".")
            and self.renderer.can_render(path)
        ]
        return sorted(files, key=lambda p: p.name)

    def load(self, path: Path) -> RenderedPost:
        """Read, parse and render one post file.

        Args:
            path: Path to the post file.

        Returns:
            The rendered post.
        """
        text = path.read_text(encoding="utf-8")
        post = Post.from_text(path, text)
        return RenderedPost(post=post, html=self.renderer.render(post.body))
