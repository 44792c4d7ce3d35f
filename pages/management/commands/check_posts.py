import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from corpus.checks import run_checks


class Command(BaseCommand):
    help = "Run content-integrity checks over the Markdown corpus"

    def add_arguments(self, parser):
        parser.add_argument("root", nargs="?", default="", help="Corpus directory (default: settings.POSTS_ROOT)")
        parser.add_argument("--strict", action="store_true", help="Fail on warnings as well as errors")
        parser.add_argument("--format", choices=["text", "json"], default="text")

    def handle(self, *args, **options):
        root = Path(options["root"] or settings.POSTS_ROOT).expanduser().resolve()
        if not root.is_dir():
            raise CommandError(f"Corpus directory not found: {root}")

        report = run_checks(
            root,
            ignore=getattr(settings, "POSTS_IGNORE", ()),
            redirects=getattr(settings, "SITE_REDIRECTS", {}),
        )

        if options["format"] == "json":
            self.stdout.write(json.dumps(report.to_dict(), indent=2))
        else:
            styles = {"error": self.style.ERROR, "warning": self.style.WARNING, "info": str}
            for issue in report.issues:
                self.stdout.write(styles[issue.severity](f"{issue.severity:7} {issue.code:24} {issue.path}: {issue.message}"))
            self.stdout.write(
                f"{report.documents} documents, {len(report.errors)} errors, {len(report.warnings)} warnings"
            )

        if not report.ok(strict=options["strict"]):
            raise CommandError("content checks failed")
        if options["format"] == "text":
            self.stdout.write(self.style.SUCCESS("Content checks passed."))
