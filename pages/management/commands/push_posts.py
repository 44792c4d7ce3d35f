import json
import urllib.request
from urllib.error import HTTPError

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from pages.models import Post


def fetch_docs():
    """Published posts whose content changed since the last successful push."""
    docs = []
    for p in Post.objects.filter(is_published=True).prefetch_related("categories").order_by("date", "id"):
        if p.pushed_hash == p.content_hash:
            continue
        docs.append((p, {
            "doc_key": p.doc_key,
            "title": p.title,
            "slug": p.slug,
            "tags": [c.name for c in p.categories.all()],
            "authors": [a.name for a in p.ordered_authors()],
            "date": p.date.isoformat(),
            "html": p.body_html,
            "content_hash": p.content_hash,
            "version": p.version,
            "updated_at": (p.modified or p.date).isoformat(),
        }))
    return docs


class Command(BaseCommand):
    help = "POST changed posts to the remote content API"

    def add_arguments(self, parser):
        parser.add_argument("--url", default="", help="Endpoint (default: settings.CONTENT_API_URL)")
        parser.add_argument("--token", default="", help="API token (default: settings.CONTENT_API_TOKEN)")

    def handle(self, *args, **options):
        url = options["url"] or settings.CONTENT_API_URL
        token = options["token"] or settings.CONTENT_API_TOKEN
        if not url or not token:
            raise CommandError("both --url and --token are required (or BLOG_CONTENT_API_URL / BLOG_CONTENT_API_TOKEN)")

        pushed = 0
        for post, d in fetch_docs():
            data = json.dumps(d).encode("utf-8")
            req = urllib.request.Request(url, data=data, method="POST")
            req.add_header("Content-Type", "application/json")
            req.add_header("Authorization", f"Token {token}")
            try:
                with urllib.request.urlopen(req) as r:
                    self.stdout.write(f"{d['slug']} {r.read().decode()}")
            except HTTPError as e:
                body = e.read().decode("utf-8", errors="replace")
                self.stderr.write(f"{d['slug']} HTTP {e.code} {e.reason}\n{body}")
                raise CommandError(f"push failed for {d['slug']}") from e

            post.pushed_hash = post.content_hash
            post.pushed_at = timezone.now()
            post.save(update_fields=["pushed_hash", "pushed_at"])
            pushed += 1

        self.stdout.write(self.style.SUCCESS(f"Pushed {pushed} posts."))
