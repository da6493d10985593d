"""High-level orchestration for post page generation.

This module turns a pre-built :class:`~blog_pages.catalog.PostCatalog` into one
themed HTML page per post. Each page is rendered from ``post_page.jinja`` with
the post's metadata, its Markdown body rendered by
:class:`~blog_pages.generator.renderer.HtmlContentRenderer`, previous/next
links from :func:`~blog_pages.sequencer.resolve_post`, and a sidebar listing the
whole series. Requests for unknown slugs produce the shared not-found page
instead of an error.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.catalog import build_catalog
>>> from blog_pages.config import load_site_config
>>> from blog_pages.generator import PostPageGenerator
>>> site = load_site_config(Path("config/blog.yaml"))  # doctest: +SKIP
>>> catalog = build_catalog(site.content_dir)  # doctest: +SKIP
>>> PostPageGenerator(site, catalog).run()  # doctest: +SKIP
[PosixPath('public/posts/intro/index.html'), ..., PosixPath('public/404.html')]
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from http import HTTPStatus
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from blog_pages._constants import NOT_FOUND_FILENAME, POST_ROUTE_TEMPLATE
from blog_pages.catalog import PostNotFoundError
from blog_pages.generator.link_rewriter import build_link_extension
from blog_pages.generator.models import PostLinkModel, RenderedPage
from blog_pages.generator.renderer import HtmlContentRenderer
from blog_pages.sequencer import resolve_post

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from blog_pages.catalog import PostCatalog, PostSummary
    from blog_pages.config import SiteConfig


class PostPageGenerator:
    """Render every catalogued post into a themed HTML page."""

    def __init__(
        self,
        site_config: SiteConfig,
        catalog: PostCatalog,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with configuration and the shared catalog.

        Parameters
        ----------
        site_config : SiteConfig
            Site configuration providing routing, theme and Pygments style.
        catalog : PostCatalog
            Catalog built once for this build; it is never rescanned here.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        output_dir : Path, optional
            Override for the HTML output directory; defaults to the site config.
        """
        self.site = site_config
        self.catalog = catalog
        self.output_dir = output_dir or site_config.output_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(
            site_config.pygments_style,
            extensions=[build_link_extension(site_config, catalog)],
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("post_page.jinja")
        self.not_found_template = self.env.get_template("not_found.jinja")
        self.generated_at = dt.datetime.now(dt.UTC)

    def run(self, slugs: cabc.Iterable[str] | None = None) -> list[Path]:
        """Write post pages plus the not-found page and return their paths.

        Parameters
        ----------
        slugs : Iterable[str], optional
            Restrict generation to these slugs; defaults to the whole catalog.

        Returns
        -------
        list[Path]
            Written files in catalog order, followed by the not-found page.

        Raises
        ------
        PostNotFoundError
            If ``slugs`` names a post missing from the catalog. The not-found
            page is written before the error propagates.
        """
        selected = list(slugs) if slugs is not None else self.catalog.slugs
        written: list[Path] = []
        missing: list[str] = []
        for slug in selected:
            page = self.render_post(slug)
            if not page.found:
                missing.append(slug)
                continue
            written.append(self.write(page))
        written.append(self.write(self.render_not_found()))
        if missing:
            raise PostNotFoundError(missing[0])
        return written

    def render_post(self, slug: str) -> RenderedPage:
        """Render the page for ``slug``, or the not-found page if it is unknown."""
        try:
            resolved = resolve_post(self.catalog, slug)
        except PostNotFoundError:
            return self.render_not_found(slug)

        summary = resolved.summary
        body = self.renderer.render(resolved.body)
        context = {
            "site": self.site,
            "theme": self.site.theme,
            "post": summary,
            "meta": resolved.metadata,
            "body_html": body.html,
            "toc_items": body.toc_items,
            "previous": self._optional_link(resolved.previous),
            "next": self._optional_link(resolved.next),
            "nav_links": self._nav_links(current=summary.slug),
            "pygments_css": self.renderer.stylesheet,
            "html_title": self._format_page_title(summary),
            "home_href": self.site.index_url,
            "generated_at": self.generated_at,
        }
        html = self.template.render(**context)
        return RenderedPage(
            route=POST_ROUTE_TEMPLATE.format(slug=summary.slug),
            html=_ensure_trailing_newline(html),
            slug=summary.slug,
        )

    def render_not_found(self, slug: str | None = None) -> RenderedPage:
        """Render the shared not-found page, mentioning ``slug`` when given."""
        context = {
            "site": self.site,
            "theme": self.site.theme,
            "requested_slug": slug,
            "nav_links": self._nav_links(current=None),
            "home_href": self.site.index_url,
            "html_title": f"{self.site.theme.not_found_heading} | "
            f"{self.site.theme.site_name}",
            "generated_at": self.generated_at,
        }
        html = self.not_found_template.render(**context)
        return RenderedPage(
            route=NOT_FOUND_FILENAME,
            html=_ensure_trailing_newline(html),
            status=HTTPStatus.NOT_FOUND,
            slug=slug,
        )

    def write(self, page: RenderedPage) -> Path:
        """Write ``page`` beneath the output directory and return its path."""
        output_path = self.output_dir / page.route
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(page.html, encoding="utf-8")
        return output_path

    def _link(self, summary: PostSummary) -> PostLinkModel:
        return PostLinkModel(
            slug=summary.slug,
            title=summary.title,
            subtitle=summary.subtitle,
            index=summary.index,
            href=self.site.post_url(summary.slug),
        )

    def _optional_link(self, summary: PostSummary | None) -> PostLinkModel | None:
        return self._link(summary) if summary is not None else None

    def _nav_links(self, *, current: str | None) -> list[PostLinkModel]:
        """Build sidebar links for every post, flagging the current one."""
        links: list[PostLinkModel] = []
        for summary in self.catalog:
            link = self._link(summary)
            link.is_current = summary.slug == current
            links.append(link)
        return links

    def _format_page_title(self, summary: PostSummary) -> str:
        """Compose the HTML title from the post title and site name."""
        return f"{summary.title} | {self.site.theme.site_name}"


def _ensure_trailing_newline(html: str) -> str:
    return html if html.endswith("\n") else f"{html}\n"


__all__ = ["PostPageGenerator"]
