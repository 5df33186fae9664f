"""Utilities for rendering markdown prose and syntax-highlighted code examples."""

from __future__ import annotations

from html import escape

from markdown import Markdown
from markupsafe import Markup
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from swe_guide._constants import DEFAULT_CODE_LANGUAGE

LANGUAGE_PREFIX = "language-"
MARKDOWN_EXTENSIONS = ["fenced_code", "codehilite", "tables", "sane_lists"]


class LanguageTaggedFormatter(HtmlFormatter):
    """HTML formatter that labels each block with the language it was written in.

    The wrapper ``<div>`` gets ``data-language`` and the ``<code>`` element a
    ``language-*`` class. Markdown's codehilite extension hands every fenced
    block's language to its formatter as ``lang_str``, so each block carries
    its own tag however the fences are nested.
    """

    def __init__(self, lang_str: str = "", **options: object) -> None:
        super().__init__(**options)
        self.language = lang_str.removeprefix(LANGUAGE_PREFIX) or "text"

    def _wrap_div(self, inner):
        safe_lang = escape(self.language, quote=True)
        yield 0, f'<div class="{self.cssclass}" data-language="{safe_lang}">'
        yield from inner
        yield 0, "</div>\n"

    def _wrap_code(self, inner):
        safe_lang = escape(self.language, quote=True)
        yield 0, f'<code class="{LANGUAGE_PREFIX}{safe_lang}">'
        yield from inner
        yield 0, "</code>"


class HtmlContentRenderer:
    """Render markdown prose and code listings with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        default_language: str = DEFAULT_CODE_LANGUAGE,
    ) -> None:
        """Initialize a renderer with a Pygments style and default language.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        default_language : str, optional
            Language tag used when a code example does not name one.
        """
        self.pygments_style = pygments_style
        self.default_language = default_language

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return HtmlFormatter(style=self.pygments_style).get_style_defs(".codehilite")

    def markdown(self, text: str) -> Markup:
        """Render markdown into HTML, tagging fenced code with its language."""
        if not text.strip():
            return Markup("")
        md = Markdown(
            extensions=MARKDOWN_EXTENSIONS,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": LanguageTaggedFormatter,
                }
            },
            output_format="html",
        )
        return Markup(md.convert(text))

    def code_block(self, code: str, language: str | None = None) -> Markup:
        """Render ``code`` verbatim into highlighted HTML.

        Parameters
        ----------
        code : str
            Source snippet. It is treated as opaque text: leading and trailing
            newlines are kept and markup characters are escaped, never
            interpreted.
        language : str, optional
            Language tag; defaults to the renderer's default language. Tags
            without a Pygments lexer fall back to plain text but are still
            reported in ``data-language``.

        Returns
        -------
        Markup
            ``<div class="codehilite" data-language="...">`` wrapping
            ``<pre><code class="language-...">``.
        """
        lang = language or self.default_language
        if "\r" in code or code.startswith("\ufeff"):
            # lexers rewrite carriage returns and drop a leading byte order mark
            return self._plain_block(code, lang)
        try:
            lexer = get_lexer_by_name(lang, stripnl=False, ensurenl=False)
        except ClassNotFound:
            lexer = get_lexer_by_name("text", stripnl=False, ensurenl=False)
        formatter = LanguageTaggedFormatter(
            lang_str=f"{LANGUAGE_PREFIX}{lang}",
            style=self.pygments_style,
            cssclass="codehilite",
            wrapcode=True,
        )
        html = highlight(code, lexer, formatter)
        if code and not code.endswith("\n"):
            # the formatter terminates the last line; the listing must not grow
            html = html.replace("\n</code>", "</code>", 1)
        return Markup(html)

    @staticmethod
    def _plain_block(code: str, language: str) -> Markup:
        """Return an unhighlighted block whose text is exactly ``code``."""
        safe_lang = escape(language, quote=True)
        text = escape(code, quote=False).replace("\r", "&#13;")
        return Markup(
            f'<div class="codehilite" data-language="{safe_lang}"><pre><span></span>'
            f'<code class="{LANGUAGE_PREFIX}{safe_lang}">{text}</code></pre></div>\n'
        )


__all__ = ["HtmlContentRenderer", "LanguageTaggedFormatter"]
