"""
Hugo-style shortcodes found in post bodies.

    {{% image alt="Architecture" src="images/posts/arch.png" %}}
    {{% github "https://github.com/thombergs/code-examples/tree/master/x" %}}
    {{% info title="Note" %}} Markdown here {{% /info %}}

The site generator owns the real expansion. The built-in handlers below cover
the shortcodes the renderer needs for a readable HTML fragment; anything else
is left in place.
"""

from __future__ import annotations

import html
import logging
import re
import shlex
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SHORTCODE_RE = re.compile(
    r"\{\{(?P<delim>[%<])\s*(?P<closing>/)?\s*(?P<name>[\w.-]+)(?P<args>.*?)\s*[%>]\}\}",
    re.S,
)
FENCE_RE = re.compile(r"(?ms)^[ \t]*(```|~~~)[^\n]*\n.*?^[ \t]*\1[ \t]*$")

PAIRED = ("info", "warning", "tip")


@dataclass
class Shortcode:
    name: str
    positional: List[str] = field(default_factory=list)
    named: Dict[str, str] = field(default_factory=dict)
    closing: bool = False
    line: int = 1

    def arg(self, key: str, index: Optional[int] = None, default: str = "") -> str:
        if key in self.named:
            return self.named[key]
        if index is not None and index < len(self.positional):
            return self.positional[index]
        return default


def parse_args(raw: str) -> Tuple[List[str], Dict[str, str]]:
    positional: List[str] = []
    named: Dict[str, str] = {}
    try:
        tokens = shlex.split(raw)
    except ValueError:
        # unbalanced quotes; fall back to whitespace tokens
        tokens = raw.split()
    for tok in tokens:
        key, sep, value = tok.partition("=")
        if sep and re.fullmatch(r"[\w-]+", key):
            named[key] = value
        else:
            positional.append(tok)
    return positional, named


def _mask_fences(body: str) -> Tuple[str, List[Tuple[str, str]]]:
    """Replace fenced code blocks by placeholders that keep their line count."""
    blocks: List[Tuple[str, str]] = []

    def repl(m: re.Match) -> str:
        token = f"\x00fence{len(blocks)}\x00" + "\n" * m.group(0).count("\n")
        blocks.append((token, m.group(0)))
        return token

    return FENCE_RE.sub(repl, body), blocks


def _unmask_fences(text: str, blocks: List[Tuple[str, str]]) -> str:
    for token, original in blocks:
        text = text.replace(token, original)
    return text


def _to_shortcode(m: re.Match, masked: str) -> Shortcode:
    positional, named = parse_args(m.group("args"))
    return Shortcode(
        name=m.group("name"),
        positional=positional,
        named=named,
        closing=bool(m.groupdict().get("closing")),
        line=masked.count("\n", 0, m.start()) + 1,
    )


def find_shortcodes(body: str) -> List[Shortcode]:
    masked, _ = _mask_fences(body)
    return [_to_shortcode(m, masked) for m in SHORTCODE_RE.finditer(masked)]


def unbalanced_shortcodes(body: str) -> List[Shortcode]:
    """Paired shortcodes that are opened and never closed, or closed and never opened."""
    stack: List[Shortcode] = []
    stray: List[Shortcode] = []
    for sc in find_shortcodes(body):
        if sc.name not in PAIRED:
            continue
        if not sc.closing:
            stack.append(sc)
            continue
        for i in range(len(stack) - 1, -1, -1):
            if stack[i].name == sc.name:
                del stack[i]
                break
        else:
            stray.append(sc)
    return sorted(stack + stray, key=lambda s: s.line)


# Handlers take the shortcode and, for paired shortcodes, the inner Markdown.
Handler = Callable[[Shortcode, Optional[str]], str]


def render_image(sc: Shortcode, inner: Optional[str] = None) -> str:
    src = sc.arg("src", 0)
    if not src:
        return ""
    alt = sc.arg("alt", 1)
    attrs = f'src="{html.escape(src)}" alt="{html.escape(alt)}"'
    title = sc.arg("title")
    if title:
        attrs += f' title="{html.escape(title)}"'
    return f"<img {attrs}>"


def render_github(sc: Shortcode, inner: Optional[str] = None) -> str:
    url = sc.arg("url", 0)
    if not url:
        return ""
    return (
        '<div class="github">'
        f'<a href="{html.escape(url)}">Example Code</a>'
        "</div>"
    )


def render_callout(sc: Shortcode, inner: Optional[str] = None) -> str:
    title = sc.arg("title")
    heading = f'<p class="{sc.name}-title">{html.escape(title)}</p>\n' if title else ""
    return f'\n\n<div class="{sc.name}" markdown="1">\n{heading}\n{(inner or "").strip()}\n\n</div>\n\n'


DEFAULT_HANDLERS: Dict[str, Handler] = {
    "image": render_image,
    "github": render_github,
    "info": render_callout,
    "warning": render_callout,
    "tip": render_callout,
}


def expand_shortcodes(body: str, handlers: Optional[Dict[str, Handler]] = None) -> str:
    handlers = DEFAULT_HANDLERS if handlers is None else handlers
    masked, blocks = _mask_fences(body)

    def paired(m: re.Match) -> str:
        sc = _to_shortcode(m, masked)
        return handlers[sc.name](sc, m.group("inner"))

    for name in PAIRED:
        if name not in handlers:
            continue
        pattern = re.compile(
            r"\{\{(?P<delim>[%<])\s*(?P<name>" + re.escape(name) + r")(?=[\s%>/])(?P<args>.*?)\s*[%>]\}\}"
            r"(?P<inner>.*?)"
            r"\{\{[%<]\s*/\s*" + re.escape(name) + r"\s*[%>]\}\}",
            re.S,
        )
        masked = pattern.sub(paired, masked)

    def single(m: re.Match) -> str:
        sc = _to_shortcode(m, masked)
        handler = handlers.get(sc.name)
        if handler is None or sc.closing or sc.name in PAIRED:
            logger.warning("leaving shortcode %r (line %d) unexpanded", sc.name, sc.line)
            return m.group(0)
        return handler(sc, None)

    masked = SHORTCODE_RE.sub(single, masked)
    return _unmask_fences(masked, blocks)
