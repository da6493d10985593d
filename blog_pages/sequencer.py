"""Resolve a requested post and its place in the reading order.

Given a slug and a pre-built :class:`~blog_pages.catalog.PostCatalog`, the
sequencer reads that single post's body from disk and pairs it with the posts
immediately before and after it in catalog order. Other bodies are never read.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .catalog import CatalogError, PostSummary
from .front_matter import FrontMatterError, split_front_matter

if typ.TYPE_CHECKING:
    from .catalog import PostCatalog


@dc.dataclass(frozen=True, slots=True)
class ResolvedPost:
    """A post body with its metadata and reading-order neighbours.

    Attributes
    ----------
    summary : PostSummary
        Catalog entry for the requested post.
    body : str
        Markdown body following the front matter, unmodified.
    previous : PostSummary or None
        Post read just before this one; ``None`` for the first post.
    next : PostSummary or None
        Post read just after this one; ``None`` for the last post.
    """

    summary: PostSummary
    body: str
    previous: PostSummary | None
    next: PostSummary | None

    @property
    def slug(self) -> str:
        return self.summary.slug

    @property
    def metadata(self) -> dict[str, typ.Any]:
        return self.summary.metadata.as_dict()


def resolve_post(catalog: PostCatalog, slug: str) -> ResolvedPost:
    """Return the post matching ``slug`` together with its neighbours.

    Parameters
    ----------
    catalog : PostCatalog
        Catalog built once for the current build.
    slug : str
        Exact slug of the requested post.

    Returns
    -------
    ResolvedPost
        The post body, its summary, and the adjacent summaries.

    Raises
    ------
    PostNotFoundError
        If no post in ``catalog`` has exactly this slug.
    CatalogError
        If the post's file can no longer be parsed.
    """
    summary = catalog.get(slug)
    previous, following = catalog.neighbours(slug)
    try:
        _meta, body = split_front_matter(
            summary.source_path.read_text(encoding="utf-8")
        )
    except FrontMatterError as exc:
        msg = f"{summary.source_path.name}: {exc}"
        raise CatalogError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = (
            f"{summary.source_path.name}: not valid UTF-8 text "
            f"({exc.reason} at byte {exc.start})"
        )
        raise CatalogError(msg) from exc
    return ResolvedPost(summary=summary, body=body, previous=previous, next=following)


__all__ = ["ResolvedPost", "resolve_post"]
