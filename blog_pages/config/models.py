"""Typed dataclasses describing blog site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from blog_pages.catalog import DEFAULT_SUFFIXES


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Copy and styling shared by every generated page."""

    site_name: str = "DIY Firestore"
    tagline: str = "Building a Firestore clone, one post at a time"
    index_heading: str = "Index"
    home_label: str = "Home"
    not_found_heading: str = "Page not found"


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from YAML config."""

    content_dir: Path
    output_dir: Path = Path("public")
    base_path: str = ""
    content_suffixes: tuple[str, ...] = DEFAULT_SUFFIXES
    strict_sequence: bool = False
    pygments_style: str = "dracula"
    static_dir: Path | None = None
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)

    def post_url(self, slug: str) -> str:
        """Return the site-relative URL for the post page ``slug``."""
        return f"{self.base_path}/posts/{slug}/"

    def asset_url(self, path: str) -> str:
        """Prefix a root-relative asset path with the configured base path."""
        return f"{self.base_path}/{path.lstrip('/')}"

    @property
    def index_url(self) -> str:
        return f"{self.base_path}/"


__all__ = ["SiteConfig", "SiteConfigError", "ThemeConfig"]
