from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .frontmatter import FrontMatterError, parse_front_matter
from .text import plain_text, slugify, truncate_words

logger = logging.getLogger(__name__)

SUMMARY_WORDS = 20

TIMESTAMP_RE = re.compile(
    r"""^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})
        (?:(?:[Tt]|[ \t]+)
           (?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?
           (?:[ \t]*(?P<tz>Z|z|(?P<sign>[-+])(?P<tz_hour>\d{2})(?::?(?P<tz_minute>\d{2}))?))?
        )?$""",
    re.VERBOSE,
)


def parse_timestamp(value: Any) -> datetime:
    """Accepts YAML dates/datetimes and ISO-8601-like strings."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        raise ValueError(f"not a timestamp: {value!r}")

    m = TIMESTAMP_RE.match(value.strip())
    if not m:
        raise ValueError(f"not an ISO-8601 timestamp: {value!r}")

    g = m.groupdict()
    fraction = (g["fraction"] or "0")[:6].ljust(6, "0")
    tz = None
    if g["tz"] in ("Z", "z"):
        tz = timezone.utc
    elif g["tz"]:
        offset = timedelta(hours=int(g["tz_hour"]), minutes=int(g["tz_minute"] or 0))
        tz = timezone(-offset if g["sign"] == "-" else offset)

    return datetime(
        int(g["year"]),
        int(g["month"]),
        int(g["day"]),
        int(g["hour"] or 0),
        int(g["minute"] or 0),
        int(g["second"] or 0),
        int(fraction),
        tzinfo=tz,
    )


def _string_list(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [p.strip() for p in raw.split(",") if p.strip()]
    if isinstance(raw, (list, tuple, set)):
        return [str(x).strip() for x in raw if x is not None and str(x).strip()]
    s = str(raw).strip()
    return [s] if s else []


def _optional_str(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


def _optional_timestamp(meta: Dict[str, Any], key: str, path: Optional[Path]) -> Optional[datetime]:
    raw = meta.get(key)
    if raw is None or raw == "":
        return None
    try:
        return parse_timestamp(raw)
    except ValueError:
        logger.warning("%s: ignoring unparseable %s %r", path or "<text>", key, raw)
        return None


@dataclass
class PostDocument:
    title: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    date: Optional[datetime] = None
    modified: Optional[datetime] = None
    authors: List[str] = field(default_factory=list)
    excerpt: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    body: str = ""
    path: Optional[Path] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_meta(cls, meta: Dict[str, Any], body: str, path: Optional[Path] = None) -> "PostDocument":
        categories = _string_list(meta.get("categories", meta.get("tags")))
        authors = _string_list(meta.get("authors", meta.get("author")))

        modified_key = "modified" if "modified" in meta else "lastmod"
        return cls(
            title=_optional_str(meta.get("title")),
            categories=sorted(set(categories)),
            date=_optional_timestamp(meta, "date", path),
            modified=_optional_timestamp(meta, modified_key, path),
            authors=list(dict.fromkeys(authors)),
            excerpt=_optional_str(meta.get("excerpt")),
            description=_optional_str(meta.get("description")),
            image=_optional_str(meta.get("image")),
            url=_optional_str(meta.get("url")),
            body=body,
            path=path,
            meta=meta,
        )

    @classmethod
    def from_text(cls, text: str, path: Optional[Path] = None) -> "PostDocument":
        meta, body = parse_front_matter(text, path)
        return cls.from_meta(meta, body, path)

    @property
    def slug(self) -> str:
        if self.url and self.url.strip("/ "):
            return self.url.strip("/ ")
        if self.title:
            return slugify(self.title)
        if self.path is not None:
            return slugify(self.path.stem)
        return "untitled"

    @property
    def summary(self) -> str:
        if self.excerpt:
            return self.excerpt
        if self.description:
            return self.description
        return truncate_words(plain_text(self.body), SUMMARY_WORDS)

    @property
    def published(self) -> Optional[datetime]:
        return self.date

    @property
    def last_changed(self) -> Optional[datetime]:
        return self.modified or self.date


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError("invalid-encoding", f"not valid UTF-8: {e}", path) from e


def load_document(path: Path) -> PostDocument:
    text = read_source(path)
    return PostDocument.from_text(text, path)


def iter_sources(root: Path, ignore: Iterable[str] = ()) -> Iterator[Path]:
    ignored = set(ignore)
    root = Path(root)

    def skip(rel: Path) -> bool:
        return any(part.startswith((".", "_")) or part in ignored for part in rel.parts)

    candidates = [p for p in root.rglob("*.md") if p.is_file()]
    for p in sorted(candidates, key=lambda x: x.relative_to(root).as_posix().lower()):
        if not skip(p.relative_to(root)):
            yield p


def load_corpus(
    root: Path, ignore: Iterable[str] = ()
) -> Tuple[List[PostDocument], List[Tuple[Path, FrontMatterError]]]:
    docs: List[PostDocument] = []
    failures: List[Tuple[Path, FrontMatterError]] = []
    for p in iter_sources(root, ignore):
        try:
            docs.append(load_document(p))
        except FrontMatterError as e:
            logger.warning("%s", e)
            failures.append((p, e))
    logger.info("loaded %d documents from %s (%d failed)", len(docs), root, len(failures))
    return docs, failures
