"""Build and render the blog's index page.

The index lists every post in reading order, linking each title to its page.
It consumes the same :class:`~blog_pages.catalog.PostCatalog` the post pages
use, so the listing and the previous/next chain always agree.

>>> from pathlib import Path
>>> from blog_pages.catalog import build_catalog
>>> from blog_pages.config import load_site_config
>>> from blog_pages.index_page import PostIndexBuilder
>>> site = load_site_config(Path("config/blog.yaml"))  # doctest: +SKIP
>>> catalog = build_catalog(site.content_dir)  # doctest: +SKIP
>>> PostIndexBuilder(site, catalog).run()  # doctest: +SKIP
PosixPath('public/index.html')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import INDEX_FILENAME

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .catalog import PostCatalog
    from .config import SiteConfig


class PostIndexBuilder:
    """Render a landing page enumerating every post in catalog order."""

    def __init__(
        self,
        site_config: SiteConfig,
        catalog: PostCatalog,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the index builder.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration (see
            :func:`blog_pages.config.load_site_config`).
        catalog : PostCatalog
            Catalog built once for the current build.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``blog_pages/templates`` directory when ``None``.
        output_dir : Path, optional
            Override for the output directory; defaults to the site config.
        """
        self.site = site_config
        self.catalog = catalog
        self.output_dir = output_dir or site_config.output_dir
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("post_index.jinja")

    def run(self) -> Path:
        """Render the index HTML file and return its path."""
        output_path = self.output_dir / INDEX_FILENAME
        output_path.parent.mkdir(parents=True, exist_ok=True)
        context = {
            "site": self.site,
            "theme": self.site.theme,
            "entries": self._gather_entries(),
            "home_href": self.site.index_url,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _gather_entries(self) -> list[dict[str, typ.Any]]:
        return [
            {
                "index": post.index,
                "slug": post.slug,
                "title": post.title,
                "subtitle": post.subtitle,
                "href": self.site.post_url(post.slug),
            }
            for post in self.catalog
        ]


__all__ = ["PostIndexBuilder"]
