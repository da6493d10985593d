"""Render post bodies to HTML with syntax-highlighted code blocks."""

from __future__ import annotations

import dataclasses as dc
import io
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)([ ,][^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite"')


class LanguageTaggedFormatter(HtmlFormatter):
    """HtmlFormatter that tags its wrapping div with the lexer it highlighted.

    Python-Markdown's codehilite passes ``lang_str`` (the lexer's primary alias
    behind ``lang_prefix``) to custom formatter classes. Fenced, tilde and
    indented blocks all go through it, so every highlighted block carries its
    own ``data-language`` regardless of how it was written.
    """

    def __init__(self, lang_str: str = "", **options: typ.Any) -> None:
        super().__init__(**options)
        self.language = lang_str or "text"

    def format_unencoded(self, tokensource: typ.Any, outfile: typ.Any) -> None:
        buffer = io.StringIO()
        super().format_unencoded(tokensource, buffer)
        safe_lang = escape(self.language, quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'{match.group(0)} data-language="{safe_lang}"'

        outfile.write(CODEHILITE_OPEN_TAG.sub(_repl, buffer.getvalue(), count=1))


@dc.dataclass(slots=True)
class RenderedMarkdown:
    """HTML for a post body plus the headings found while rendering.

    Attributes
    ----------
    html : str
        Rendered body HTML.
    toc_items : list[dict[str, str]]
        Second- and third-level headings with ``label``, ``anchor`` and
        ``level`` keys, in document order.
    """

    html: str
    toc_items: list[dict[str, str]] = dc.field(default_factory=list)


class HtmlContentRenderer:
    """Render markdown with consistently styled code blocks."""

    def __init__(
        self,
        pygments_style: str = "dracula",
        extensions: cabc.Sequence[Extension] = (),
    ) -> None:
        """Initialize a renderer with a Pygments style and extra extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"dracula"``.
        extensions : Sequence[Extension], optional
            Additional Markdown extensions, such as the post link rewriter.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._extensions = list(extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        return self.render(text).html

    def render(self, text: str) -> RenderedMarkdown:
        """Render ``text`` and collect its heading anchors.

        Parameters
        ----------
        text : str
            Markdown body of a post. Empty or whitespace-only input renders to
            an empty result.

        Returns
        -------
        RenderedMarkdown
            HTML with ``data-language`` attributes on highlighted blocks and
            the table of contents entries for ``##``/``###`` headings.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return RenderedMarkdown(html="")
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
            *self._extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": LanguageTaggedFormatter,
                    "lang_prefix": "",
                },
                "toc": {"toc_depth": "2-3"},
            },
        )
        html = md.convert(normalized)
        toc_tokens = getattr(md, "toc_tokens", [])
        return RenderedMarkdown(html=html, toc_items=list(_flatten_toc(toc_tokens)))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Dedent list-nested fences and drop annotations after the language.

        Fences such as ``rust,no_run`` or ``rust focus=3:5`` keep only the
        language name so Pygments can resolve a lexer.
        """
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            return f"{fence}{language}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _flatten_toc(
    tokens: cabc.Iterable[typ.Mapping[str, typ.Any]],
) -> cabc.Iterator[dict[str, str]]:
    """Yield heading entries from Python-Markdown's nested ``toc_tokens``."""
    for token in tokens:
        yield {
            "label": str(token.get("name", "")).strip(),
            "anchor": str(token.get("id", "")),
            "level": str(token.get("level", "")),
        }
        yield from _flatten_toc(token.get("children", []))


__all__ = ["HtmlContentRenderer", "LanguageTaggedFormatter", "RenderedMarkdown"]
