"""Unit tests for the Markdown renderer and the post link rewriter."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from markdown import Markdown

from blog_pages.catalog import build_catalog
from blog_pages.config import SiteConfig
from blog_pages.generator.link_rewriter import (
    RelativeLinkExtension,
    RelativeLinkTreeprocessor,
)
from blog_pages.generator.renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from .conftest import PostWriter


def test_indented_fence_in_list_is_highlighted() -> None:
    """Fences nested in list items keep their language after normalization."""
    renderer = HtmlContentRenderer()
    html = renderer.markdown(
        "- **Example** demonstrates inline code\n\n"
        "  ```rust,no_run\n"
        '  fn main() { println!("hi"); }\n'
        "  ```\n"
    )

    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one("div.codehilite")
    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "rust"
    assert "fn main" in block.get_text()


def test_fence_annotations_after_space_are_dropped() -> None:
    renderer = HtmlContentRenderer()
    html = renderer.markdown("```sql focus=2\nselect 1;\n```\n")

    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("div.codehilite").get("data-language") == "sql"


def test_blank_body_renders_empty() -> None:
    rendered = HtmlContentRenderer().render("  \n\n")
    assert rendered.html == ""
    assert rendered.toc_items == []


def test_toc_collects_second_and_third_level_headings() -> None:
    rendered = HtmlContentRenderer().render(
        "# Title\n\n## Reads\n\n### Single documents\n\n## Writes\n"
    )
    assert [(item["label"], item["level"]) for item in rendered.toc_items] == [
        ("Reads", "2"),
        ("Single documents", "3"),
        ("Writes", "2"),
    ]


def _languages(html: str) -> list[str | None]:
    soup = BeautifulSoup(html, "html.parser")
    return [block.get("data-language") for block in soup.select("div.codehilite")]


def test_tilde_and_backtick_fences_each_keep_their_language() -> None:
    html = HtmlContentRenderer().markdown(
        "~~~python\nprint(1)\n~~~\n\n```rust\nfn main() {}\n```\n"
    )
    assert _languages(html) == ["python", "rust"]


def test_indented_block_does_not_shift_fence_languages() -> None:
    """Indented code is highlighted as text and the next fence keeps its label."""
    html = HtmlContentRenderer().markdown(
        "Shell:\n\n    ls -la\n\nThen:\n\n```rust\nfn main() {}\n```\n"
    )

    soup = BeautifulSoup(html, "html.parser")
    blocks = soup.select("div.codehilite")
    assert [block.get("data-language") for block in blocks] == ["text", "rust"]
    assert "ls -la" in blocks[0].get_text()
    assert "fn main" in blocks[1].get_text()


def test_unknown_fence_language_falls_back_to_text() -> None:
    html = HtmlContentRenderer("monokai").markdown("```no-such-lexer\nplain\n```\n")
    assert _languages(html) == ["text"]
    assert "plain" in html


@pytest.fixture
def link_processor(
    content_dir: Path, write_post: PostWriter
) -> RelativeLinkTreeprocessor:
    write_post("01-intro.mdx", title="Intro", index=1)
    write_post("02-defining-requirements.mdx", title="Requirements", index=2)
    site = SiteConfig(content_dir=content_dir, base_path="/diy-firestore")
    catalog = build_catalog(content_dir)
    return RelativeLinkTreeprocessor(Markdown(), site, catalog)


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        (
            "./02-defining-requirements.mdx",
            "/diy-firestore/posts/defining-requirements/",
        ),
        (
            "02-defining-requirements.mdx#goals",
            "/diy-firestore/posts/defining-requirements/#goals",
        ),
        ("/posts/01-intro", "/diy-firestore/posts/intro/"),
        ("/posts/intro/", "/diy-firestore/posts/intro/"),
        ("/images/table.svg", "/diy-firestore/images/table.svg"),
        ("/diy-firestore/images/table.svg", None),
        ("./03-missing.mdx", None),
        ("diagram.png", None),
        ("#section", None),
        ("https://firebase.google.com", None),
        ("mailto:someone@example.com", None),
        (None, None),
    ],
)
def test_link_rewriting(
    link_processor: RelativeLinkTreeprocessor,
    target: str | None,
    expected: str | None,
) -> None:
    actual = link_processor.rewrite(target)
    assert actual == expected, f"rewrite({target!r}) gave {actual!r}"


def test_extension_rewrites_links_in_rendered_html(
    content_dir: Path, write_post: PostWriter
) -> None:
    write_post("01-intro.mdx", title="Intro", index=1)
    site = SiteConfig(content_dir=content_dir)
    renderer = HtmlContentRenderer(
        extensions=[RelativeLinkExtension(site, build_catalog(content_dir))]
    )

    html = renderer.markdown("Back to [the intro](01-intro.mdx).")

    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("a").get("href") == "/posts/intro/"
