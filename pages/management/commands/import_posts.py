import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from pages.importer import import_corpus


class Command(BaseCommand):
    help = "Load Markdown posts (YAML front matter + body) into the database, updating by url slug"

    def add_arguments(self, parser):
        parser.add_argument("root", nargs="?", default="", help="Corpus directory (default: settings.POSTS_ROOT)")
        parser.add_argument("--dry-run", action="store_true", help="Report what would change without writing")
        parser.add_argument("--unpublish-missing", action="store_true", help="Unpublish posts no longer in the corpus")

    def handle(self, *args, **options):
        root = Path(options["root"] or settings.POSTS_ROOT).expanduser().resolve()
        if not root.is_dir():
            raise CommandError(f"Corpus directory not found: {root}")

        result = import_corpus(
            root,
            ignore=getattr(settings, "POSTS_IGNORE", ()),
            dry_run=options["dry_run"],
            unpublish_missing=options["unpublish_missing"],
        )

        summary = {k: len(v) for k, v in result.to_dict().items()}
        self.stdout.write(json.dumps({"root": str(root), "dry_run": options["dry_run"], **summary, "details": result.to_dict()}, indent=2))

        for line in result.failed:
            self.stderr.write(self.style.ERROR(f"failed: {line}"))
        for line in result.skipped:
            self.stderr.write(self.style.WARNING(f"skipped draft: {line}"))
        self.stdout.write(self.style.SUCCESS(
            f"Imported {len(result.inserted)} new, {len(result.updated)} updated, {len(result.unchanged)} unchanged."
        ))
