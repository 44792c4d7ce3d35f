"""
Content-integrity checks over a corpus of Markdown posts.

Checks report; they never edit a file. Duplicate urls in particular are a
known property of the corpus (several drafts of one article share a url), so
they are warnings, and only ``strict`` mode fails on them.
"""

from __future__ import annotations

import difflib
import logging
import re
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from itertools import combinations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .document import PostDocument, iter_sources, parse_timestamp, read_source
from .frontmatter import FrontMatterError, parse_front_matter, round_trips
from .render import render_document
from .shortcodes import DEFAULT_HANDLERS, find_shortcodes, unbalanced_shortcodes

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"
INFO = "info"

REQUIRED_FIELDS = {"title": ERROR, "date": ERROR, "url": WARNING}
TIMESTAMP_FIELDS = ("date", "modified", "lastmod")
SITE_SECTIONS = {"categories", "tags", "authors", "images", "assets", "posts", "archive"}
DRAFT_TITLE_SIMILARITY = 0.9


@dataclass
class Issue:
    code: str
    severity: str
    path: str
    message: str


@dataclass
class CheckReport:
    documents: int = 0
    issues: List[Issue] = field(default_factory=list)

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.severity == WARNING]

    def ok(self, strict: bool = False) -> bool:
        if self.errors:
            return False
        return not (strict and self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "documents": self.documents,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [asdict(i) for i in self.issues],
        }


def _display(path: Optional[Path], root: Optional[Path] = None) -> str:
    if path is None:
        return "<text>"
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def check_fields(meta: Dict[str, Any], where: str) -> List[Issue]:
    issues = []
    for key, severity in REQUIRED_FIELDS.items():
        value = meta.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            issues.append(Issue("missing-field", severity, where, f"front matter has no {key!r}"))

    stamps = {}
    for key in TIMESTAMP_FIELDS:
        if meta.get(key) in (None, ""):
            continue
        try:
            stamps[key] = parse_timestamp(meta[key])
        except ValueError:
            issues.append(Issue("invalid-date", ERROR, where, f"{key} {meta[key]!r} is not an ISO-8601 timestamp"))

    modified_key = "modified" if "modified" in stamps else "lastmod"
    if "date" in stamps and modified_key in stamps:
        date, modified = stamps["date"], stamps[modified_key]
        # naive and aware timestamps cannot be compared
        if (date.tzinfo is None) == (modified.tzinfo is None) and modified < date:
            issues.append(Issue("modified-before-date", WARNING, where, f"{modified_key} is earlier than date"))
    return issues


def check_round_trip(meta: Dict[str, Any], where: str) -> List[Issue]:
    if round_trips(meta):
        return []
    return [Issue("round-trip-mismatch", ERROR, where, "front matter does not survive a dump/load round trip")]


def check_shortcodes(body: str, where: str, known: Iterable[str] = DEFAULT_HANDLERS) -> List[Issue]:
    known = set(known)
    issues = []
    seen = set()
    for sc in find_shortcodes(body):
        if sc.name in known or sc.name in seen:
            continue
        seen.add(sc.name)
        issues.append(Issue("unknown-shortcode", INFO, where, f"line {sc.line}: shortcode {sc.name!r} has no local handler"))
    for sc in unbalanced_shortcodes(body):
        kind = "closing" if sc.closing else "opening"
        issues.append(Issue("unbalanced-shortcode", WARNING, where, f"line {sc.line}: {kind} {sc.name!r} has no partner"))
    return issues


def check_document_links(doc: PostDocument, where: str) -> List[Issue]:
    rendered = render_document(doc)
    anchors = rendered.anchors
    issues = []
    for href in rendered.links:
        if href.startswith("#") and len(href) > 1 and href[1:] not in anchors:
            issues.append(Issue("broken-anchor", WARNING, where, f"no heading with id {href[1:]!r}"))
    return issues


def check_unique_urls(docs: Sequence[PostDocument], root: Optional[Path] = None) -> List[Issue]:
    by_slug: Dict[str, List[PostDocument]] = defaultdict(list)
    for d in docs:
        by_slug[d.slug].append(d)

    issues = []
    for slug, group in sorted(by_slug.items()):
        if len(group) < 2:
            continue
        paths = ", ".join(_display(d.path, root) for d in group)
        for d in group:
            issues.append(Issue("duplicate-url", WARNING, _display(d.path, root), f"url {slug!r} is shared by: {paths}"))
    return issues


def _link_target(href: str) -> Optional[str]:
    if not href.startswith("/") or href.startswith("//"):
        return None
    path = re.split(r"[?#]", href, maxsplit=1)[0]
    parts = [p for p in path.split("/") if p]
    if not parts:
        return None
    if parts[0] in SITE_SECTIONS or "." in parts[-1]:
        return None
    return parts[0]


def check_internal_links(
    docs: Sequence[PostDocument], root: Optional[Path] = None, redirects: Iterable[str] = ()
) -> List[Issue]:
    """Site-relative links must point at a post url or a redirect source."""
    known = {d.slug for d in docs}
    known.update(t for t in map(_link_target, redirects) if t is not None)
    issues = []
    for d in docs:
        for href in render_document(d).links:
            target = _link_target(href)
            if target is not None and target not in known:
                issues.append(Issue("broken-link", WARNING, _display(d.path, root), f"link {href!r} matches no post"))
    return issues


def _title_key(doc: PostDocument) -> str:
    return " ".join(re.sub(r"[^\w\s]", " ", (doc.title or "").lower()).split())


def find_draft_groups(docs: Sequence[PostDocument]) -> List[List[PostDocument]]:
    """Groups of documents that look like drafts of one article (same slug or near-identical title)."""
    parent = list(range(len(docs)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    def union(i: int, j: int) -> None:
        parent[find(i)] = find(j)

    titles = [_title_key(d) for d in docs]
    for i, j in combinations(range(len(docs)), 2):
        if docs[i].slug == docs[j].slug:
            union(i, j)
        elif titles[i] and titles[j]:
            ratio = difflib.SequenceMatcher(None, titles[i], titles[j]).ratio()
            if ratio >= DRAFT_TITLE_SIMILARITY:
                union(i, j)

    groups: Dict[int, List[PostDocument]] = defaultdict(list)
    for i, d in enumerate(docs):
        groups[find(i)].append(d)
    return [g for g in groups.values() if len(g) > 1]


def check_drafts(docs: Sequence[PostDocument], root: Optional[Path] = None) -> List[Issue]:
    issues = []
    for group in find_draft_groups(docs):
        paths = ", ".join(_display(d.path, root) for d in group)
        issues.append(Issue("possible-draft", INFO, _display(group[0].path, root), f"{len(group)} documents look like drafts of one article: {paths}"))
    return issues


def check_text(text: str, path: Optional[Path] = None, root: Optional[Path] = None):
    """Per-document checks. Returns (document or None, issues)."""
    where = _display(path, root)
    try:
        meta, body = parse_front_matter(text, path)
    except FrontMatterError as e:
        code = {
            "missing": "front-matter-missing",
            "invalid-yaml": "front-matter-invalid",
            "not-a-mapping": "front-matter-not-mapping",
        }[e.reason]
        return None, [Issue(code, ERROR, where, str(e))]

    doc = PostDocument.from_meta(meta, body, path)
    issues = check_fields(meta, where)
    issues += check_round_trip(meta, where)
    issues += check_shortcodes(body, where)
    issues += check_document_links(doc, where)
    return doc, issues


def check_documents(
    sources: Iterable[Path], root: Optional[Path] = None, redirects: Iterable[str] = ()
) -> CheckReport:
    report = CheckReport()
    docs: List[PostDocument] = []
    for p in sources:
        report.documents += 1
        try:
            text = read_source(p)
        except FrontMatterError as e:
            report.issues.append(Issue("invalid-encoding", ERROR, _display(p, root), str(e)))
            continue
        doc, issues = check_text(text, p, root)
        report.issues.extend(issues)
        if doc is not None:
            docs.append(doc)

    report.issues += check_unique_urls(docs, root)
    report.issues += check_internal_links(docs, root, redirects)
    report.issues += check_drafts(docs, root)
    logger.info(
        "checked %d documents: %d errors, %d warnings",
        report.documents, len(report.errors), len(report.warnings),
    )
    return report


def run_checks(root: Path, ignore: Iterable[str] = (), redirects: Iterable[str] = ()) -> CheckReport:
    root = Path(root)
    return check_documents(iter_sources(root, ignore), root, redirects)

