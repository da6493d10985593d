"""Cyclopts CLI entrypoint for building the blog.

The ``blog`` console script defined here reads ``config/blog.yaml``, builds the
post catalog once, and renders every post page, the index page, and the
not-found page into the output directory. ``blog catalog`` prints the reading
order without writing anything, which is handy for checking front matter
before a build.

Examples
--------
Build the whole site with the default configuration:

>>> from blog_pages.cli import main
>>> main()  # doctest: +SKIP

Rebuild a single post into a scratch directory:

>>> from blog_pages.cli import app
>>> app(["generate", "--post", "intro", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .assets import copy_static_assets
from .catalog import CatalogError, PostCatalog, build_catalog
from .config import SiteConfig, SiteConfigError, load_site_config
from .generator import PostPageGenerator
from .index_page import PostIndexBuilder

DEFAULT_CONFIG = Path("config/blog.yaml")

app = App(name="blog", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_catalog(site_config: SiteConfig, *, strict: bool) -> PostCatalog:
    """Build the catalog for ``site_config`` and report any index gaps."""
    catalog = build_catalog(
        site_config.content_dir,
        suffixes=site_config.content_suffixes,
        strict_sequence=strict or site_config.strict_sequence,
    )
    for missing in catalog.gaps:
        print(f"warning: no post has index {missing}")
    return catalog


@app.command(help="Render post pages, the index, and the not-found page.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    post: typ.Annotated[
        list[str] | None,
        Parameter(help="Slug of a post to render (repeatable)", env_var="INPUT_POST"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    strict: typ.Annotated[
        bool, Parameter(help="Reject gaps in the post index sequence")
    ] = False,
) -> None:
    """Generate the static blog for the requested site configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``blog.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    post : list[str] or None, optional
        Slugs to render; when ``None`` (default) every post is rendered
        together with the index page and static assets.
    output_dir : Path or None, optional
        Override the configured output directory.
    strict : bool, optional
        Treat gaps in the ``index`` sequence as fatal.

    Returns
    -------
    None
        Writes rendered artefacts and prints the generated paths.

    Raises
    ------
    CatalogError
        If the content directory cannot form a valid catalog.
    SiteConfigError
        If the configuration file is invalid.
    SystemExit
        With status 1 when a requested post does not exist; the other
        requested posts and the not-found page are still written and reported.
    """
    site_config = load_site_config(config)
    catalog = _load_catalog(site_config, strict=strict)
    out_dir = output_dir or site_config.output_dir

    generator = PostPageGenerator(site_config, catalog, output_dir=out_dir)
    unknown = [slug for slug in post or () if slug not in catalog]
    selected = [slug for slug in post if slug in catalog] if post else None
    for path in generator.run(selected):
        print(f"wrote {_format_path(path)}")

    if unknown:
        for slug in unknown:
            print(f"not found: {slug}")
        sys.exit(1)
    if post:
        return
    index_path = PostIndexBuilder(site_config, catalog, output_dir=out_dir).run()
    print(f"wrote {_format_path(index_path)}")
    for path in copy_static_assets(site_config.static_dir, out_dir):
        print(f"copied {_format_path(path)}")


@app.command(name="catalog", help="List posts in reading order.")
def list_catalog(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    strict: typ.Annotated[
        bool, Parameter(help="Reject gaps in the post index sequence")
    ] = False,
) -> None:
    """Print ``index  slug  title`` for every post in catalog order."""
    site_config = load_site_config(config)
    catalog = _load_catalog(site_config, strict=strict)
    for summary in catalog:
        print(f"{summary.index:>3}  {summary.slug}  {summary.title}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `blog` console command.

    Catalog and configuration errors, including a missing config file, are
    reported on stderr with exit status 2 instead of a traceback.
    """
    try:
        app()
    except (CatalogError, SiteConfigError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
