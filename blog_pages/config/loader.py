"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from blog_pages.catalog import DEFAULT_SUFFIXES

from .helpers import (
    _build_theme_config,
    _normalize_base_path,
    _normalize_suffixes,
    _optional_str,
    _resolve_path,
)
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the blog build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/blog.yaml``). Relative paths inside the file are resolved
        against the file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with content and output locations, routing base
        path, sequencing policy and theme copy.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level YAML is not a mapping, ``content_dir`` is missing, or
        a field has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_pages.config import load_site_config
    >>> config = load_site_config(Path("config/blog.yaml"))  # doctest: +SKIP
    >>> config.base_path  # doctest: +SKIP
    '/diy-firestore'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    content_dir = _optional_str(raw.get("content_dir"))
    if not content_dir:
        msg = "Configuration is missing 'content_dir'."
        raise SiteConfigError(msg)

    static_dir = _optional_str(raw.get("static_dir"))
    strict_sequence = raw.get("strict_sequence", False)
    if not isinstance(strict_sequence, bool):
        msg = "'strict_sequence' must be true or false."
        raise SiteConfigError(msg)

    return SiteConfig(
        content_dir=_resolve_path(content_dir, base_dir),
        output_dir=_resolve_path(raw.get("output_dir", "public"), base_dir),
        base_path=_normalize_base_path(raw.get("base_path")),
        content_suffixes=_normalize_suffixes(
            raw.get("content_suffixes"), DEFAULT_SUFFIXES
        ),
        strict_sequence=strict_sequence,
        pygments_style=raw.get("pygments_style", "dracula"),
        static_dir=_resolve_path(static_dir, base_dir) if static_dir else None,
        theme=_build_theme_config(raw.get("theme")),
    )


__all__ = ["load_site_config"]
