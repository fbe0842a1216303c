"""Site building functionality for postpress.

This module contains the core logic for building the blog from source files.
It loads configuration, parses and renders every post, composes pages from
templates, and writes the output tree.

Each phase fans out one task per file and waits for all of them before the
next phase starts. Any failure aborts the build.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from postpress.yaml.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

import yaml
from jinja2 import TemplateError, TemplateNotFound, TemplateSyntaxError

from .assets import AssetPipeline
from .content import POSTS_URL_DIR, ListingEntry, PostLoader, RenderedPost
from .extractors import FrontMatterError
from .protocols import TemplateRenderer
from .renderers import MarkdownOptions, MarkdownRenderer
from .templates import HOME_TEMPLATE, TemplateEngine
from .utils import clearable_entries, remove_path, write_file

T = TypeVar("T")


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


DEFAULT_CONFIG = {
    "posts_dir": "posts",
    "templates_dir": "templates",
    "styles_dir": "styles",
    "output_dir": "gh-pages",
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Rendered posts in homepage order (most recent first).
        output_dir: Directory where the site was built.
    """

    posts: list[RenderedPost]
    output_dir: Path


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from postpress.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / "postpress.yaml"
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def build_site(
    project_root: Path,
    options: MarkdownOptions | None = None,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        options: Markdown rendering options; defaults to MarkdownOptions().
        output_dir_override: Optional path to write the build output instead of config output_dir.

    Returns:
        BuildResult containing the rendered posts and the output directory.

    Raises:
        BuildError: If a post or template cannot be read, parsed or rendered.
        OSError: If the posts directory is missing or output cannot be written.
    """
    return asyncio.run(_build(project_root, options, output_dir_override))


async def _build(
    project_root: Path,
    options: MarkdownOptions | None,
    output_dir_override: Path | None,
) -> BuildResult:
    config = load_config(project_root)
    posts_dir = project_root / config["posts_dir"]
    templates_dir = project_root / config["templates_dir"]
    styles_dir = project_root / config["styles_dir"]
    output_dir = output_dir_override or (project_root / config["output_dir"])

    loader = PostLoader(posts_dir, MarkdownRenderer(options))
    files = loader.iter_files()
    engine = TemplateEngine(templates_dir)
    _load_templates(engine)

    await _run_all(
        asyncio.to_thread(remove_path, entry) for entry in clearable_entries(output_dir)
    )

    posts = await _run_all(asyncio.to_thread(_load_post, loader, path) for path in files)
    posts.reverse()

    posts_out = output_dir / POSTS_URL_DIR
    await _run_all(
        asyncio.to_thread(_write_post, engine, post, posts_out) for post in posts
    )

    entries = [ListingEntry.from_rendered(post) for post in posts]
    homepage = _render_home(engine, entries, templates_dir / HOME_TEMPLATE)
    await asyncio.to_thread(write_file, output_dir / "index.html", homepage)

    await asyncio.to_thread(AssetPipeline(styles_dir, output_dir).run)
    return BuildResult(posts=posts, output_dir=output_dir)


async def _run_all(jobs: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """Run jobs concurrently and wait for every one of them.

    The first failure cancels the jobs still pending and is re-raised
    unwrapped.

    Args:
        jobs: Coroutines to run.

    Returns:
        Results in the order the jobs were given.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(job) for job in jobs]
    except ExceptionGroup as exc:
        raise exc.exceptions[0] from None
    return [task.result() for task in tasks]


def _load_templates(engine: TemplateEngine) -> None:
    """Compile the templates, reporting failures against the template file."""
    try:
        engine.load()
    except TemplateSyntaxError as exc:
        path = Path(exc.filename) if exc.filename else engine.templates_dir
        raise BuildError(
            path,
            f"Template syntax error on line {exc.lineno}: {exc.message}",
            exc,
        ) from exc
    except TemplateNotFound as exc:
        raise BuildError(
            engine.templates_dir / str(exc.name), "Template not found", exc
        ) from exc


def _load_post(loader: PostLoader, path: Path) -> RenderedPost:
    """Load one post, reporting failures against the post file."""
    try:
        return loader.load(path)
    except FrontMatterError as exc:
        raise BuildError(path, str(exc), exc) from exc
    except Exception as exc:
        raise BuildError(path, _format_error_message(exc), exc) from exc


def _write_post(engine: TemplateRenderer, post: RenderedPost, posts_out: Path) -> None:
    """Render a post through the post template and write it to disk."""
    try:
        rendered = engine.render_post(post)
    except TemplateError as exc:
        raise BuildError(post.post.path, _format_error_message(exc), exc) from exc
    write_file(posts_out / post.output_name, rendered)


def _render_home(
    engine: TemplateRenderer, entries: list[ListingEntry], template_path: Path
) -> str:
    """Render the homepage, reporting failures against the home template."""
    try:
        return engine.render_home(entries)
    except TemplateError as exc:
        raise BuildError(template_path, _format_error_message(exc), exc) from exc


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if isinstance(exc, UnicodeDecodeError):
        return f"File is not valid UTF-8: {error_msg}"
    if isinstance(exc, OSError):
        return f"Cannot read file: {exc.strerror or error_msg}"

    return f"{error_type}: {error_msg}"
