from __future__ import annotations

import hashlib
import re
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup


def slugify(s: str) -> str:
    s = s.strip().lower()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s_-]+", "-", s)
    s = re.sub(r"^-+|-+$", "", s)
    return s or "untitled"


def sha256_hex(text: str) -> str:
    h = hashlib.sha256()
    h.update(text.encode("utf-8"))
    return h.hexdigest()


def stable_doc_key(path: Path, root: Optional[Path] = None) -> str:
    """Hash of the root-relative POSIX path, so keys survive a checkout move."""
    if root is not None:
        try:
            return sha256_hex(path.resolve().relative_to(root.resolve()).as_posix())
        except ValueError:
            pass
    return sha256_hex(path.as_posix())


def plain_text(markdown_text: str) -> str:
    """Rough plain text of a Markdown body: no code blocks, markup or shortcodes."""
    text = re.sub(r"(?ms)^(```|~~~).*?^\1[ \t]*$", " ", markdown_text)
    text = re.sub(r"\{\{[%<].*?[%>]\}\}", " ", text, flags=re.S)
    text = re.sub(r"!\[[^\]]*\]\([^)]*\)", " ", text)
    text = re.sub(r"\[([^\]]*)\]\([^)]*\)", r"\1", text)
    text = BeautifulSoup(text, "html.parser").get_text(" ")
    text = re.sub(r"[`*_#>|]", " ", text)
    return " ".join(text.split())


def truncate_words(text: str, count: int) -> str:
    words = text.split()
    if len(words) <= count:
        return " ".join(words)
    return " ".join(words[:count]) + "…"
