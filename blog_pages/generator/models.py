"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
from http import HTTPStatus


@dc.dataclass(slots=True)
class PostLinkModel:
    """Navigation link to another post, passed to templates.

    Attributes
    ----------
    slug : str
        Slug of the linked post.
    title : str
        Link label.
    subtitle : str or None
        Optional description rendered beside the label.
    index : int
        Sequence number of the linked post.
    href : str
        Site-relative URL of the linked post page.
    is_current : bool
        ``True`` when the link points at the page being rendered.
    """

    slug: str
    title: str
    subtitle: str | None
    index: int
    href: str
    is_current: bool = False


@dc.dataclass(slots=True)
class RenderedPage:
    """HTML produced for one route together with its response status."""

    route: str
    html: str
    status: HTTPStatus = HTTPStatus.OK
    slug: str | None = None

    @property
    def found(self) -> bool:
        return self.status is HTTPStatus.OK


__all__ = ["PostLinkModel", "RenderedPage"]
