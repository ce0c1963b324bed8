"""
Markdown renderer - Convert document bytes to HTML.

Uses Python-Markdown with GitHub-flavoured extras: tables, fenced code
highlighted by Pygments (CSS classes plus line numbers, no inline styles),
heading ids, hard line breaks, task lists, bare URL autolinks,
strikethrough with one or two tildes and math left in place for MathJax
on the client.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import Any

import markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from pygments.formatters import HtmlFormatter

DEFAULT_EXTENSIONS = [
    "tables",
    "fenced_code",
    "codehilite",
    "toc",
    "nl2br",
    "sane_lists",
    "pymdownx.tasklist",
    "pymdownx.magiclink",
    "pymdownx.tilde",
    "pymdownx.arithmatex",
]

DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, Any]] = {
    "codehilite": {
        "css_class": "highlight",
        "linenums": True,
        "guess_lang": False,
    },
    "pymdownx.arithmatex": {"generic": True},
    "pymdownx.tilde": {"subscript": False},
}

HIGHLIGHT_STYLE = "default"

# ~text~ but not ~~text~~ and not a lone tilde next to whitespace
SINGLE_TILDE_DELETE_RE = r"(?<!~)(~)(?!~|\s)(.+?)(?<!~|\s)~(?!~)"


class SingleTildeDeleteExtension(Extension):
    """Render ``~text~`` as ``<del>``, after pymdownx.tilde handles ``~~text~~``"""

    def extendMarkdown(self, md):
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(SINGLE_TILDE_DELETE_RE, "del"), "single_tilde_delete", 60
        )


class MarkdownRenderer:
    """Render collaborator producing XHTML fragments.

    A python-markdown converter keeps state between calls, so it is reset
    for every document and guarded by a lock when shared across threads.
    """

    def __init__(
        self,
        extensions: list[str | Extension] | None = None,
        extension_configs: dict[str, dict[str, Any]] | None = None,
    ):
        self._lock = threading.Lock()
        self._md = markdown.Markdown(
            extensions=(
                extensions
                if extensions is not None
                else [*DEFAULT_EXTENSIONS, SingleTildeDeleteExtension()]
            ),
            extension_configs=(
                extension_configs
                if extension_configs is not None
                else DEFAULT_EXTENSION_CONFIGS
            ),
            output_format="xhtml",
        )

    def __call__(self, data: bytes) -> str:
        text = data.decode("utf-8-sig", errors="replace")
        with self._lock:
            return self._md.reset().convert(text)


@lru_cache(maxsize=None)
def highlight_css(style: str = HIGHLIGHT_STYLE) -> str:
    """Stylesheet matching the highlight classes in rendered code blocks"""
    return HtmlFormatter(style=style).get_style_defs(".highlight")
