"""postpress blog generator.

This package turns a flat folder of markdown posts with YAML front matter
into a static blog: one HTML page per post, rendered through a Jinja2
template, plus a homepage listing an excerpt of every post.

The main entry point is the CLI module, which builds the site from the
current working directory.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
