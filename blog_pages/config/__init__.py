"""Load and validate the blog's site configuration YAML.

This subpackage parses ``config/blog.yaml``, applies defaults, resolves paths
relative to the config file, and returns a :class:`SiteConfig` that the catalog
builder and page generators consume.

Examples
--------
>>> from pathlib import Path
>>> from blog_pages.config import load_site_config
>>> site = load_site_config(Path("config/blog.yaml"))  # doctest: +SKIP
>>> site.post_url("intro")  # doctest: +SKIP
'/diy-firestore/posts/intro/'
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, ThemeConfig

__all__ = ["SiteConfig", "SiteConfigError", "ThemeConfig", "load_site_config"]
