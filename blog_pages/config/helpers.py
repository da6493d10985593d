"""Utility helpers shared by the blog configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError, ThemeConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object, base_dir: Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    path = Path(str(value)).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _normalize_base_path(value: object | None) -> str:
    """Return ``value`` as ``/segment`` without a trailing slash, or ``""``."""
    text = _optional_str(value)
    if not text:
        return ""
    return "/" + text.strip("/")


def _normalize_suffixes(value: object, default: tuple[str, ...]) -> tuple[str, ...]:
    """Normalize suffix definitions into lowercase ``.ext`` strings."""
    match value:
        case None:
            return default
        case str() as text:
            raw: list[object] = list(text.split())
        case list() | tuple():
            raw = list(value)
        case _:
            msg = "'content_suffixes' must be a string or a list of strings."
            raise SiteConfigError(msg)
    suffixes: list[str] = []
    for item in raw:
        text = str(item).strip().lower()
        if not text:
            continue
        suffixes.append(text if text.startswith(".") else f".{text}")
    if not suffixes:
        msg = "'content_suffixes' must name at least one file extension."
        raise SiteConfigError(msg)
    return tuple(suffixes)


def _build_theme_config(payload: typ.Mapping[str, typ.Any] | None) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    if not payload:
        return base
    if not isinstance(payload, dict):
        msg = "'theme' must be a mapping."
        raise SiteConfigError(msg)
    return ThemeConfig(
        site_name=payload.get("site_name", base.site_name),
        tagline=payload.get("tagline", base.tagline),
        index_heading=payload.get("index_heading", base.index_heading),
        home_label=payload.get("home_label", base.home_label),
        not_found_heading=payload.get("not_found_heading", base.not_found_heading),
    )


__all__ = [
    "_build_theme_config",
    "_normalize_base_path",
    "_normalize_suffixes",
    "_optional_str",
    "_resolve_path",
]
