"""End-to-end tests for post page, index page, and not-found page generation.

The ``series`` fixture writes three posts (``intro``, ``basics``,
``queries``); the generator renders them into ``tmp_path / "public"`` and the
tests parse the HTML with BeautifulSoup to check navigation, metadata, code
highlighting and link rewriting.
"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import pytest
from bs4 import BeautifulSoup

from blog_pages.assets import copy_static_assets
from blog_pages.catalog import PostNotFoundError, build_catalog
from blog_pages.generator import PostPageGenerator
from blog_pages.index_page import PostIndexBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

    from blog_pages.catalog import PostCatalog
    from blog_pages.config import SiteConfig


@pytest.fixture
def catalog(site_config: SiteConfig, series: list[Path]) -> PostCatalog:  # noqa: ARG001
    return build_catalog(site_config.content_dir)


@pytest.fixture
def generated(site_config: SiteConfig, catalog: PostCatalog) -> dict[str, Path]:
    """Run the generator and map each written route to its path."""
    written = PostPageGenerator(site_config, catalog).run()
    return {
        path.relative_to(site_config.output_dir).as_posix(): path for path in written
    }


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_one_page_per_post_plus_not_found(generated: dict[str, Path]) -> None:
    assert list(generated) == [
        "posts/intro/index.html",
        "posts/basics/index.html",
        "posts/queries/index.html",
        "404.html",
    ]


def test_middle_page_links_previous_and_next(generated: dict[str, Path]) -> None:
    soup = _soup(generated["posts/basics/index.html"])

    previous = soup.select_one("a.post-pager__previous")
    following = soup.select_one("a.post-pager__next")

    assert previous is not None, "expected a previous link on the basics page"
    assert previous.get("href") == "/diy-firestore/posts/intro/"
    assert "Intro" in previous.get_text()
    assert following is not None, "expected a next link on the basics page"
    assert following.get("href") == "/diy-firestore/posts/queries/"


def test_boundary_pages_have_single_link(generated: dict[str, Path]) -> None:
    first = _soup(generated["posts/intro/index.html"])
    last = _soup(generated["posts/queries/index.html"])

    assert first.select_one("a.post-pager__previous") is None
    assert first.select_one("a.post-pager__next") is not None
    assert last.select_one("a.post-pager__previous") is not None
    assert last.select_one("a.post-pager__next") is None


def test_metadata_rendered_by_name(generated: dict[str, Path]) -> None:
    soup = _soup(generated["posts/intro/index.html"])

    assert soup.select_one(".post-title").get_text(strip=True) == "Intro"
    assert soup.select_one(".post-subtitle").get_text(strip=True) == "Start here"
    assert soup.title is not None
    assert soup.title.get_text() == "Intro | DIY Firestore"


def test_sidebar_marks_current_post(generated: dict[str, Path]) -> None:
    soup = _soup(generated["posts/basics/index.html"])

    links = soup.select(".series-nav ol a")
    current = soup.select(".series-nav a.is-current")

    assert [a.get_text(strip=True) for a in links] == ["Intro", "Basics", "Queries"]
    assert len(current) == 1
    assert current[0].get_text(strip=True) == "Basics"


def test_code_block_highlighted_with_language(generated: dict[str, Path]) -> None:
    soup = _soup(generated["posts/basics/index.html"])

    block = soup.select_one(".post-body div.codehilite")

    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "rust"
    assert "fn main" in block.get_text()


def test_source_links_rewritten_to_post_routes(generated: dict[str, Path]) -> None:
    soup = _soup(generated["posts/intro/index.html"])

    link = soup.select_one(".post-body a")

    assert link is not None
    assert link.get("href") == "/diy-firestore/posts/basics/"


def test_headings_listed_in_toc(generated: dict[str, Path]) -> None:
    soup = _soup(generated["posts/intro/index.html"])

    entries = soup.select(".post-toc a")

    assert [a.get_text(strip=True) for a in entries] == ["Welcome"]
    assert entries[0].get("href") == "#welcome"


def test_unknown_slug_renders_not_found(
    site_config: SiteConfig, catalog: PostCatalog
) -> None:
    generator = PostPageGenerator(site_config, catalog)

    page = generator.render_post("transactions")

    assert page.status is HTTPStatus.NOT_FOUND
    assert not page.found
    assert page.route == "404.html"
    soup = BeautifulSoup(page.html, "html.parser")
    assert "transactions" in soup.select_one(".not-found__detail").get_text()
    assert soup.select_one(".post-body") is None


def test_run_with_unknown_slug_writes_not_found_then_raises(
    site_config: SiteConfig, catalog: PostCatalog
) -> None:
    generator = PostPageGenerator(site_config, catalog)

    with pytest.raises(PostNotFoundError):
        generator.run(["basics", "transactions"])

    assert (site_config.output_dir / "posts" / "basics" / "index.html").exists()
    assert (site_config.output_dir / "404.html").exists()
    assert not (site_config.output_dir / "posts" / "transactions").exists()


def test_index_lists_posts_in_order(
    site_config: SiteConfig, catalog: PostCatalog
) -> None:
    path = PostIndexBuilder(site_config, catalog).run()

    soup = _soup(path)
    links = soup.select("a.post-list__link")

    assert path == site_config.output_dir / "index.html"
    assert [a.get_text(strip=True) for a in links] == ["Intro", "Basics", "Queries"]
    assert [a.get("href") for a in links] == [
        "/diy-firestore/posts/intro/",
        "/diy-firestore/posts/basics/",
        "/diy-firestore/posts/queries/",
    ]
    subtitles = [p.get_text(strip=True) for p in soup.select(".post-list__subtitle")]
    assert subtitles == ["Start here"]


def test_root_relative_images_get_base_path(
    site_config: SiteConfig, write_post: typ.Any, content_dir: Path
) -> None:
    write_post(
        "01-intro.mdx",
        title="Intro",
        index=1,
        body="![Diagram](/images/diagram.svg)\n\n[Elsewhere](https://example.com)\n",
    )
    catalog = build_catalog(content_dir)

    page = PostPageGenerator(site_config, catalog).render_post("intro")

    soup = BeautifulSoup(page.html, "html.parser")
    assert soup.select_one(".post-body img").get("src") == (
        "/diy-firestore/images/diagram.svg"
    )
    assert soup.select_one(".post-body a").get("href") == "https://example.com"


def test_copy_static_assets(tmp_path: Path) -> None:
    static_dir = tmp_path / "static"
    (static_dir / "images").mkdir(parents=True)
    (static_dir / "images" / "a.svg").write_text("<svg/>", encoding="utf-8")
    output_dir = tmp_path / "public"

    copied = copy_static_assets(static_dir, output_dir)

    assert copied == [output_dir / "images" / "a.svg"]
    assert (output_dir / "images" / "a.svg").read_text(encoding="utf-8") == "<svg/>"
    assert copy_static_assets(None, output_dir) == []
