r"""Split blog post sources into YAML front matter and Markdown body.

Every post starts with a YAML mapping fenced by ``---`` lines. This module
separates that header from the body without touching the filesystem, and can
serialize a mapping back into the same layout so tooling can rewrite headers.

Example
-------
>>> from blog_pages.front_matter import split_front_matter
>>> meta, body = split_front_matter("---\ntitle: Intro\nindex: 1\n---\nHello\n")
>>> meta["title"], meta["index"], body
('Intro', 1, 'Hello\n')
"""

from __future__ import annotations

import io
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

DELIMITER = "---"
DELIMITER_PATTERN = re.compile(r"^---[ \t\r]*$", re.MULTILINE)


class FrontMatterError(ValueError):
    """Raised when a post's front matter block cannot be parsed."""


def _build_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return the front matter mapping and the remaining body of ``text``.

    Parameters
    ----------
    text : str
        Raw post source. A leading byte-order mark and blank lines before the
        opening delimiter are ignored.

    Returns
    -------
    tuple[dict[str, Any], str]
        The parsed metadata mapping and the body text following the closing
        delimiter. Text without an opening delimiter yields ``({}, text)``.

    Raises
    ------
    FrontMatterError
        If the block is never closed, is not valid YAML, or does not contain a
        mapping.
    """
    stripped = text.lstrip("\ufeff").lstrip("\r\n")
    first_line, _, remainder = stripped.partition("\n")
    if first_line.rstrip() != DELIMITER:
        return {}, text

    closing = DELIMITER_PATTERN.search(remainder)
    if closing is None:
        msg = "Front matter block is missing its closing '---' delimiter."
        raise FrontMatterError(msg)

    header = remainder[: closing.start()]
    body = remainder[closing.end() :]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]

    try:
        loaded = _build_loader().load(header)
    except YAMLError as exc:
        msg = f"Front matter is not valid YAML: {exc}"
        raise FrontMatterError(msg) from exc

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping of keys to values."
        raise FrontMatterError(msg)
    return dict(loaded), body


def render_front_matter(metadata: typ.Mapping[str, typ.Any], body: str) -> str:
    """Serialize ``metadata`` and ``body`` back into a post source string."""
    dumper = YAML(typ="safe")
    dumper.default_flow_style = False
    buffer = io.StringIO()
    dumper.dump(dict(metadata), buffer)
    return f"{DELIMITER}\n{buffer.getvalue()}{DELIMITER}\n{body}"


__all__ = ["FrontMatterError", "render_front_matter", "split_front_matter"]
