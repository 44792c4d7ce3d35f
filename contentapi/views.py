import logging

from django.db import transaction
from django.utils.dateparse import parse_datetime

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from .models import Doc, DocHistory

logger = logging.getLogger(__name__)

REQUIRED = ("doc_key", "content_hash", "html")


def _bad_request(message):
    return Response({"error": message}, status=status.HTTP_400_BAD_REQUEST)


def _timestamp(p, key):
    raw = p.get(key)
    if not raw:
        return None
    value = parse_datetime(str(raw))
    if value is None:
        raise ValueError(f"{key} is not an ISO-8601 timestamp")
    return value


@api_view(["POST"])
@authentication_classes([TokenAuthentication])
@permission_classes([IsAuthenticated])
def upsert_doc(request):
    """Create or replace a rendered post, keyed by doc_key. Same content hash is a no-op."""
    p = request.data

    for k in REQUIRED:
        if k not in p:
            return _bad_request(f"missing field: {k}")

    for k in ("tags", "authors"):
        if not isinstance(p.get(k, []) or [], list):
            return _bad_request(f"{k} must be a list")

    try:
        published_at = _timestamp(p, "date")
        client_updated_at = _timestamp(p, "updated_at")
        client_version = int(p.get("version", 0) or 0)
    except (TypeError, ValueError) as e:
        return _bad_request(str(e))

    fields = dict(
        title=str(p.get("title", "") or ""),
        slug=str(p.get("slug", "") or ""),
        tags=[str(t) for t in p.get("tags", []) or []],
        authors=[str(a) for a in p.get("authors", []) or []],
        published_at=published_at,
        html=str(p["html"]),
        content_hash=str(p["content_hash"]),
        client_version=client_version,
        client_updated_at=client_updated_at,
    )

    with transaction.atomic():
        doc, created = Doc.objects.select_for_update().get_or_create(
            doc_key=str(p["doc_key"]),
            defaults=dict(fields, server_version=1),
        )

        if not created:
            if doc.content_hash == fields["content_hash"]:
                return Response({"status": "no_change", "server_version": doc.server_version})

            DocHistory.objects.create(
                doc=doc,
                server_version=doc.server_version,
                content_hash=doc.content_hash,
                html=doc.html,
            )

            # Last write wins
            for k, v in fields.items():
                setattr(doc, k, v)
            doc.server_version += 1
            doc.save()

    logger.info("%s %s (v%d)", "created" if created else "updated", doc.slug or doc.doc_key, doc.server_version)
    return Response(
        {"status": "created" if created else "updated", "server_version": doc.server_version},
        status=status.HTTP_200_OK,
    )
