"""Utilities for rendering blog posts and writing their HTML pages."""

from .link_rewriter import RelativeLinkExtension
from .models import PostLinkModel, RenderedPage
from .page_generator import PostPageGenerator
from .renderer import HtmlContentRenderer

__all__ = [
    "HtmlContentRenderer",
    "PostLinkModel",
    "PostPageGenerator",
    "RelativeLinkExtension",
    "RenderedPage",
]
