r"""Discover blog posts on disk and order them into a reading sequence.

The catalog is the single source of truth for which posts exist. Every file in
the content directory contributes one :class:`PostSummary` built from its YAML
front matter and a slug derived from its filename (``01-intro.mdx`` becomes
``intro``). Summaries are sorted by the ``index`` declared in the front matter
and indexed by slug so page generators can look posts up by exact key.

Only metadata is kept in memory; post bodies are read on demand by
:mod:`blog_pages.sequencer`.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.catalog import build_catalog
>>> catalog = build_catalog(Path("posts"))  # doctest: +SKIP
>>> [post.slug for post in catalog]  # doctest: +SKIP
['intro', 'defining-requirements', 'the-basic-database']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from .front_matter import FrontMatterError, split_front_matter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_SUFFIXES: tuple[str, ...] = (".md", ".mdx")
FILENAME_PATTERN = re.compile(r"^(?P<prefix>\d{2,3})[-_](?P<slug>.+)$")
SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
RESERVED_KEYS = frozenset({"title", "subtitle", "index"})


class CatalogError(ValueError):
    """Raised when the content directory cannot form a trustworthy catalog."""


class PostNotFoundError(LookupError):
    """Raised when no post in the catalog matches the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"No post found for slug '{slug}'.")
        self.slug = slug


@dc.dataclass(frozen=True, slots=True)
class PostMetadata:
    """Front matter fields every post declares.

    Attributes
    ----------
    title : str
        Display name used for headings and navigation links.
    index : int
        Position of the post in the reading order; unique per catalog.
    subtitle : str or None
        Optional short description shown under the title.
    extra : Mapping[str, Any]
        Any additional front matter keys, passed through to templates.
    """

    title: str
    index: int
    subtitle: str | None = None
    extra: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict, hash=False)

    @classmethod
    def from_mapping(cls, raw: typ.Mapping[str, typ.Any]) -> PostMetadata:
        """Validate a front matter mapping and build metadata from it.

        Raises
        ------
        CatalogError
            If ``title`` is missing or blank, ``index`` is missing or not an
            integer, or ``subtitle`` is present but not a string.
        """
        if not raw:
            msg = "front matter block is missing"
            raise CatalogError(msg)

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            msg = "front matter requires a non-empty 'title'"
            raise CatalogError(msg)

        if "index" not in raw:
            msg = "front matter requires an 'index'"
            raise CatalogError(msg)
        index = raw["index"]
        if isinstance(index, bool) or not isinstance(index, int):
            msg = f"'index' must be an integer, got {index!r}"
            raise CatalogError(msg)

        subtitle = raw.get("subtitle")
        if subtitle is not None and not isinstance(subtitle, str):
            msg = f"'subtitle' must be a string, got {subtitle!r}"
            raise CatalogError(msg)

        extra = {key: value for key, value in raw.items() if key not in RESERVED_KEYS}
        return cls(title=title.strip(), index=index, subtitle=subtitle, extra=extra)

    def as_dict(self) -> dict[str, typ.Any]:
        """Return every front matter field by name, including extras."""
        data: dict[str, typ.Any] = dict(self.extra)
        data["title"] = self.title
        data["index"] = self.index
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        return data


@dc.dataclass(frozen=True, slots=True)
class PostSummary:
    """Catalog entry pairing post metadata with its routable slug."""

    slug: str
    metadata: PostMetadata
    source_path: Path

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def subtitle(self) -> str | None:
        return self.metadata.subtitle

    @property
    def index(self) -> int:
        return self.metadata.index


def derive_slug(filename: str) -> str:
    """Return the slug encoded in ``filename``.

    The filename stem must start with a two- or three-digit ordering prefix
    followed by ``-`` or ``_``. The prefix and the extension are dropped.

    Parameters
    ----------
    filename : str
        Bare filename such as ``"01-intro.mdx"``.

    Returns
    -------
    str
        The descriptive tail, e.g. ``"intro"``.

    Raises
    ------
    CatalogError
        If the filename lacks an ordering prefix or the remaining slug contains
        characters that are not URL-safe.

    Examples
    --------
    >>> derive_slug("01-intro.mdx")
    'intro'
    >>> derive_slug("009_simple_query-subscriptions.md")
    'simple_query-subscriptions'
    """
    stem = Path(filename).stem
    match = FILENAME_PATTERN.match(stem)
    if match is None:
        msg = f"'{filename}' does not start with a numeric ordering prefix."
        raise CatalogError(msg)
    slug = match.group("slug")
    if not SLUG_PATTERN.match(slug):
        msg = f"'{filename}' yields slug '{slug}' which is not URL-safe."
        raise CatalogError(msg)
    return slug


class PostCatalog:
    """Immutable, index-ordered collection of post summaries."""

    def __init__(self, posts: cabc.Iterable[PostSummary]) -> None:
        """Sort ``posts`` by index and validate catalog invariants.

        Raises
        ------
        CatalogError
            If two posts share a slug or an index.
        """
        ordered = tuple(sorted(posts, key=lambda post: post.index))
        positions: dict[str, int] = {}
        seen_indexes: dict[int, PostSummary] = {}
        for position, post in enumerate(ordered):
            if post.slug in positions:
                other = ordered[positions[post.slug]]
                msg = (
                    f"Duplicate slug '{post.slug}' in {other.source_path.name} "
                    f"and {post.source_path.name}."
                )
                raise CatalogError(msg)
            if post.index in seen_indexes:
                other = seen_indexes[post.index]
                msg = (
                    f"Duplicate index {post.index} in {other.source_path.name} "
                    f"and {post.source_path.name}."
                )
                raise CatalogError(msg)
            positions[post.slug] = position
            seen_indexes[post.index] = post
        self._posts = ordered
        self._positions = positions

    def __iter__(self) -> cabc.Iterator[PostSummary]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, slug: object) -> bool:
        return slug in self._positions

    def __getitem__(self, position: int) -> PostSummary:
        return self._posts[position]

    @property
    def posts(self) -> tuple[PostSummary, ...]:
        """Return summaries in reading order."""
        return self._posts

    @property
    def slugs(self) -> list[str]:
        return [post.slug for post in self._posts]

    @property
    def first(self) -> PostSummary | None:
        return self._posts[0] if self._posts else None

    @property
    def last(self) -> PostSummary | None:
        return self._posts[-1] if self._posts else None

    @property
    def gaps(self) -> list[int]:
        """Return index values missing between the lowest and highest index."""
        if not self._posts:
            return []
        present = {post.index for post in self._posts}
        low, high = self._posts[0].index, self._posts[-1].index
        return [value for value in range(low, high + 1) if value not in present]

    def position(self, slug: str) -> int:
        """Return the 0-based reading position of ``slug``.

        Raises
        ------
        PostNotFoundError
            If the catalog holds no post with exactly this slug.
        """
        try:
            return self._positions[slug]
        except KeyError as exc:
            raise PostNotFoundError(slug) from exc

    def get(self, slug: str) -> PostSummary:
        """Return the summary for ``slug`` or raise :class:`PostNotFoundError`."""
        return self._posts[self.position(slug)]

    def neighbours(self, slug: str) -> tuple[PostSummary | None, PostSummary | None]:
        """Return the posts read immediately before and after ``slug``.

        Neighbours are taken by position in the sorted catalog, so gaps in the
        index sequence are skipped rather than ending the chain.
        """
        position = self.position(slug)
        previous = self._posts[position - 1] if position > 0 else None
        following = (
            self._posts[position + 1] if position + 1 < len(self._posts) else None
        )
        return previous, following


def _iter_content_files(
    content_dir: Path, suffixes: cabc.Collection[str]
) -> list[Path]:
    """Return content files in ``content_dir`` sorted by filename."""
    wanted = {suffix.lower() for suffix in suffixes}
    return sorted(
        (
            path
            for path in content_dir.iterdir()
            if path.is_file()
            and not path.name.startswith(".")
            and path.suffix.lower() in wanted
        ),
        key=lambda path: path.name,
    )


def load_summary(path: Path) -> PostSummary:
    """Read one content file and return its catalog summary.

    Raises
    ------
    CatalogError
        If the filename, the text encoding or the front matter is invalid;
        the message names the offending file.
    """
    slug = derive_slug(path.name)
    try:
        raw, _body = split_front_matter(path.read_text(encoding="utf-8"))
    except FrontMatterError as exc:
        msg = f"{path.name}: {exc}"
        raise CatalogError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{path.name}: not valid UTF-8 text ({exc.reason} at byte {exc.start})"
        raise CatalogError(msg) from exc
    try:
        metadata = PostMetadata.from_mapping(raw)
    except CatalogError as exc:
        msg = f"{path.name}: {exc}"
        raise CatalogError(msg) from exc
    return PostSummary(slug=slug, metadata=metadata, source_path=path)


def build_catalog(
    content_dir: Path,
    *,
    suffixes: cabc.Collection[str] = DEFAULT_SUFFIXES,
    strict_sequence: bool = False,
) -> PostCatalog:
    """Scan ``content_dir`` and return the ordered post catalog.

    Parameters
    ----------
    content_dir : Path
        Directory holding one file per post.
    suffixes : Collection[str], optional
        File extensions treated as posts. Defaults to ``.md`` and ``.mdx``.
    strict_sequence : bool, optional
        When ``True``, reject catalogs whose ``index`` values skip numbers.

    Returns
    -------
    PostCatalog
        Summaries sorted ascending by ``index``.

    Raises
    ------
    CatalogError
        If the directory is missing, any post has invalid metadata or filename,
        indexes or slugs repeat, or ``strict_sequence`` is set and the index
        sequence has gaps.
    """
    if not content_dir.is_dir():
        msg = f"Content directory '{content_dir}' not found."
        raise CatalogError(msg)

    catalog = PostCatalog(
        load_summary(path) for path in _iter_content_files(content_dir, suffixes)
    )
    if strict_sequence and catalog.gaps:
        missing = ", ".join(str(value) for value in catalog.gaps)
        msg = f"Post index sequence has gaps at: {missing}."
        raise CatalogError(msg)
    return catalog


__all__ = [
    "DEFAULT_SUFFIXES",
    "CatalogError",
    "PostCatalog",
    "PostMetadata",
    "PostNotFoundError",
    "PostSummary",
    "build_catalog",
    "derive_slug",
    "load_summary",
]
