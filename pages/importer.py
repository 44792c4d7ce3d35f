"""
Import a Markdown corpus into the Post table.

Row identity is the slug. A new slug inserts at version 0, a changed content
hash bumps the version, and unchanged content only refreshes metadata. When
several documents claim one slug, the most recently changed one is imported
and the others are reported as skipped drafts.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from django.db import transaction
from django.utils import timezone

from corpus.document import PostDocument, load_corpus
from corpus.render import render_document
from corpus.text import sha256_hex, slugify, stable_doc_key

from .models import Author, Authorship, Category, Post

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    inserted: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    unpublished: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "skipped": self.skipped,
            "failed": self.failed,
            "unpublished": self.unpublished,
        }


def _aware(value: Optional[dt.datetime]) -> Optional[dt.datetime]:
    if value is not None and timezone.is_naive(value):
        return timezone.make_aware(value, dt.timezone.utc)
    return value


def _display(doc: PostDocument, root: Path) -> str:
    if doc.path is None:
        return doc.slug
    try:
        return doc.path.relative_to(root).as_posix()
    except ValueError:
        return doc.path.as_posix()


def pick_canonical(docs: Iterable[PostDocument]) -> Tuple[Dict[str, PostDocument], List[PostDocument]]:
    """One document per slug: the latest last_changed wins, later paths break ties."""
    chosen: Dict[str, PostDocument] = {}
    dropped: List[PostDocument] = []
    for doc in docs:
        current = chosen.get(doc.slug)
        if current is None:
            chosen[doc.slug] = doc
            continue
        if _aware(doc.last_changed) >= _aware(current.last_changed):
            dropped.append(current)
            chosen[doc.slug] = doc
        else:
            dropped.append(doc)
    return chosen, dropped


def _sync_relations(post: Post, doc: PostDocument) -> None:
    categories = []
    for name in doc.categories:
        category, _ = Category.objects.get_or_create(slug=slugify(name), defaults={"name": name})
        categories.append(category)
    post.categories.set(categories)

    Authorship.objects.filter(post=post).delete()
    for position, name in enumerate(doc.authors):
        author, _ = Author.objects.get_or_create(slug=slugify(name), defaults={"name": name})
        Authorship.objects.create(post=post, author=author, position=position)


def upsert_post(doc: PostDocument, doc_key: str, source_path: str = "") -> Tuple[Post, str]:
    """Insert or update by slug. Returns (post, "inserted" | "updated" | "unchanged")."""
    rendered = render_document(doc)
    fields = dict(
        title=doc.title or doc.slug,
        summary=doc.summary,
        date=_aware(doc.date),
        modified=_aware(doc.modified),
        image=doc.image or "",
        source_path=source_path,
        is_published=True,
    )

    with transaction.atomic():
        post = Post.objects.select_for_update().filter(slug=doc.slug).first()
        if post is None:
            if Post.objects.filter(doc_key=doc_key).exists():
                # same file under a new slug: keep the key unique per slug
                doc_key = sha256_hex(f"{doc.slug}::{doc_key}")
            post = Post.objects.create(
                slug=doc.slug,
                doc_key=doc_key,
                body_html=rendered.html,
                content_hash=rendered.content_hash,
                version=0,
                **fields,
            )
            status = "inserted"
        else:
            for k, v in fields.items():
                setattr(post, k, v)
            if post.content_hash != rendered.content_hash:
                post.body_html = rendered.html
                post.content_hash = rendered.content_hash
                post.version += 1
                status = "updated"
            else:
                status = "unchanged"
            post.save()

        _sync_relations(post, doc)
    return post, status


def import_corpus(
    root: Path,
    ignore: Iterable[str] = (),
    dry_run: bool = False,
    unpublish_missing: bool = False,
) -> ImportResult:
    root = Path(root)
    result = ImportResult()

    docs, failures = load_corpus(root, ignore)
    for path, err in failures:
        result.failed.append(f"{path.relative_to(root).as_posix()}: {err.reason}")

    dated = []
    for doc in docs:
        if doc.date is None:
            result.failed.append(f"{_display(doc, root)}: no valid date")
        else:
            dated.append(doc)

    chosen, dropped = pick_canonical(dated)
    for doc in dropped:
        logger.warning("skipping %s: another document owns url %r", _display(doc, root), doc.slug)
        result.skipped.append(_display(doc, root))

    for slug, doc in sorted(chosen.items()):
        if dry_run:
            existing = Post.objects.filter(slug=slug).values_list("content_hash", flat=True).first()
            if existing is None:
                result.inserted.append(slug)
            elif existing != render_document(doc).content_hash:
                result.updated.append(slug)
            else:
                result.unchanged.append(slug)
            continue

        _, status = upsert_post(doc, stable_doc_key(doc.path, root), _display(doc, root))
        getattr(result, status).append(slug)
        logger.info("%s %s", status, slug)

    if unpublish_missing:
        stale = Post.objects.filter(is_published=True).exclude(slug__in=list(chosen))
        result.unpublished = sorted(stale.values_list("slug", flat=True))
        if not dry_run:
            stale.update(is_published=False)
    return result
