"""Rewrite links inside post bodies to the generated site's routes."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from blog_pages.catalog import CatalogError, derive_slug

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from blog_pages.catalog import PostCatalog
    from blog_pages.config import SiteConfig
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    PostCatalog = typ.Any
    SiteConfig = typ.Any

LINK_ATTRIBUTES = {"a": "href", "img": "src"}
EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


class RelativeLinkExtension(Extension):
    """Point links between post sources at the rendered post pages.

    Authors link posts by their source filenames (``./02-basics.mdx``) or by
    the routes the site serves (``/posts/02-basics``). Both forms are rewritten
    to ``<base_path>/posts/<slug>/`` when the target is in the catalog, and
    other root-relative links (images, downloads) gain the configured base
    path so the site can be hosted under a sub-directory.
    """

    def __init__(self, site_config: SiteConfig, catalog: PostCatalog) -> None:
        self.site_config = site_config
        self.catalog = catalog
        super().__init__()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link treeprocessor on the Markdown instance."""
        processor = RelativeLinkTreeprocessor(md, self.site_config, self.catalog)
        md.treeprocessors.register(processor, "blog_relative_links", 15)


class RelativeLinkTreeprocessor(Treeprocessor):
    """Rewrite ``href``/``src`` attributes in the parsed markdown tree."""

    def __init__(
        self, md: Markdown, site_config: SiteConfig, catalog: PostCatalog
    ) -> None:
        super().__init__(md)
        self.site_config = site_config
        self.catalog = catalog

    def run(self, root: Element) -> Element:
        """Rewrite link targets in place and return the tree."""
        for element in root.iter():
            attribute = LINK_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            rewritten = self.rewrite(element.get(attribute))
            if rewritten:
                element.set(attribute, rewritten)
        return root

    def rewrite(self, target: str | None) -> str | None:
        """Return the site URL for ``target`` or ``None`` to leave it unchanged."""
        if not target or target.startswith(("#", "//")):
            return None
        if target.lower().startswith(EXTERNAL_PREFIXES) or "://" in target:
            return None

        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or not parsed.path:
            return None

        slug = self._post_slug(parsed.path)
        if slug is not None:
            url = self.site_config.post_url(slug)
        elif parsed.path.startswith("/"):
            base_path = self.site_config.base_path
            if not base_path or parsed.path.startswith(f"{base_path}/"):
                return None
            url = self.site_config.asset_url(parsed.path)
        else:
            return None

        if parsed.query:
            url = f"{url}?{parsed.query}"
        if parsed.fragment:
            url = f"{url}#{parsed.fragment}"
        return url

    def _post_slug(self, path: str) -> str | None:
        """Return the catalog slug ``path`` refers to, if any."""
        name = posixpath.basename(path.rstrip("/"))
        if not name:
            return None
        is_route = path.startswith("/") and "/posts/" in f"{path.rstrip('/')}/"
        suffix = posixpath.splitext(name)[1].lower()
        if not is_route and suffix not in self.site_config.content_suffixes:
            return None
        if is_route and name in self.catalog:
            return name
        try:
            slug = derive_slug(name)
        except CatalogError:
            return None
        return slug if slug in self.catalog else None


def build_link_extension(
    site_config: SiteConfig, catalog: PostCatalog
) -> RelativeLinkExtension:
    """Return a RelativeLinkExtension bound to the site and its catalog."""
    return RelativeLinkExtension(site_config, catalog)


__all__ = [
    "RelativeLinkExtension",
    "RelativeLinkTreeprocessor",
    "build_link_extension",
]
