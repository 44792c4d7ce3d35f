"""
Front matter codec for Markdown posts.

A post starts with a YAML block between two ``---`` lines:

    ---
    title: "Getting Started with Spring Boot"
    categories: ["Spring Boot"]
    date: 2021-02-24 00:00:00 +1100
    authors: [tom]
    url: getting-started-with-spring-boot
    ---
    Body in Markdown...
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml


FRONT_MATTER_RE = re.compile(r"(?s)\A---[ \t]*\n(.*?)\n?^---[ \t]*(?:\n|\Z)", re.MULTILINE)


class FrontMatterError(ValueError):
    def __init__(self, reason: str, message: str, path: Optional[Path] = None):
        self.reason = reason
        self.path = path
        where = f"{path}: " if path is not None else ""
        super().__init__(f"{where}{message}")


def _normalise(text: str) -> str:
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_front_matter(text: str) -> Tuple[Optional[str], str]:
    text = _normalise(text)
    m = FRONT_MATTER_RE.match(text)
    if not m:
        return None, text
    return m.group(1), text[m.end():]


def parse_front_matter(text: str, path: Optional[Path] = None) -> Tuple[Dict[str, Any], str]:
    raw, body = split_front_matter(text)
    if raw is None:
        raise FrontMatterError("missing", "no front matter block", path)

    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        # impossible timestamps such as 2021-02-30 surface as a plain ValueError
        raise FrontMatterError("invalid-yaml", f"front matter is not valid YAML: {e}", path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            "not-a-mapping",
            f"front matter must be a mapping, got {type(data).__name__}",
            path,
        )
    return data, body


def dump_front_matter(meta: Dict[str, Any], body: str = "") -> str:
    raw = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{raw}---\n{body}"


def round_trips(meta: Dict[str, Any]) -> bool:
    text = dump_front_matter(meta)
    try:
        again, _ = parse_front_matter(text)
    except FrontMatterError:
        return False
    return again == meta
