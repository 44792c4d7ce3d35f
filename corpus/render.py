from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import markdown
from bs4 import BeautifulSoup

from .document import PostDocument
from .shortcodes import expand_shortcodes
from .text import sha256_hex

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc", "md_in_html", "sane_lists"]
OUTLINE_LEVELS = ("h2", "h3", "h4")


@dataclass
class Heading:
    level: int
    id: str
    text: str


@dataclass
class RenderedPost:
    html: str
    content_hash: str
    outline: List[Heading] = field(default_factory=list)
    links: List[str] = field(default_factory=list)

    @property
    def anchors(self) -> set:
        soup = BeautifulSoup(self.html, "html.parser")
        return {tag["id"] for tag in soup.find_all(id=True)}


def clean_fragment(html_text: str) -> str:
    soup = BeautifulSoup(html_text, "html.parser")
    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()
    return str(soup).strip()


def render_markdown(body: str) -> str:
    expanded = expand_shortcodes(body)
    html_text = markdown.markdown(expanded, extensions=MARKDOWN_EXTENSIONS, output_format="html")
    return clean_fragment(html_text)


def extract_outline(html_text: str) -> List[Heading]:
    soup = BeautifulSoup(html_text, "html.parser")
    return [
        Heading(level=int(h.name[1]), id=h.get("id", ""), text=h.get_text(" ", strip=True))
        for h in soup.find_all(list(OUTLINE_LEVELS))
    ]


def extract_links(html_text: str) -> List[str]:
    soup = BeautifulSoup(html_text, "html.parser")
    return [a["href"] for a in soup.find_all("a", href=True)]


def render_document(doc: PostDocument) -> RenderedPost:
    fragment = render_markdown(doc.body)
    return RenderedPost(
        html=fragment,
        content_hash=sha256_hex(fragment),
        outline=extract_outline(fragment),
        links=extract_links(fragment),
    )
