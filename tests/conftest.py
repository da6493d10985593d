"""Shared fixtures for blog_pages tests.

``write_post`` creates post sources with YAML front matter inside a temporary
content directory, and ``site_config`` returns a :class:`SiteConfig` pointing at
that directory with output under ``tmp_path / "public"``.
"""

from __future__ import annotations

import typing as typ

import pytest

from blog_pages.config import SiteConfig
from blog_pages.front_matter import render_front_matter

if typ.TYPE_CHECKING:
    from pathlib import Path


class PostWriter(typ.Protocol):
    def __call__(
        self,
        filename: str,
        *,
        title: str,
        index: int,
        subtitle: str | None = None,
        body: str = "",
        **extra: typ.Any,
    ) -> Path: ...


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Return an empty content directory for post fixtures."""
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def write_post(content_dir: Path) -> PostWriter:
    """Return a helper that writes a post with front matter into content_dir."""

    def _write(
        filename: str,
        *,
        title: str,
        index: int,
        subtitle: str | None = None,
        body: str = "",
        **extra: typ.Any,
    ) -> Path:
        metadata: dict[str, typ.Any] = {"title": title, "index": index, **extra}
        if subtitle is not None:
            metadata["subtitle"] = subtitle
        path = content_dir / filename
        path.write_text(render_front_matter(metadata, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_config(tmp_path: Path, content_dir: Path) -> SiteConfig:
    """Return a site configuration rooted in the temporary directory."""
    return SiteConfig(
        content_dir=content_dir,
        output_dir=tmp_path / "public",
        base_path="/diy-firestore",
    )


@pytest.fixture
def series(write_post: PostWriter) -> list[Path]:
    """Write the three-post series used by navigation tests."""
    return [
        write_post(
            "01-intro.mdx",
            title="Intro",
            index=1,
            subtitle="Start here",
            body="## Welcome\nSee [the basics](./02-basics.mdx).\n",
        ),
        write_post(
            "02-basics.mdx",
            title="Basics",
            index=2,
            body="```rust,no_run\nfn main() {}\n```\n",
        ),
        write_post("03-queries.mdx", title="Queries", index=3, body="Queries body.\n"),
    ]
