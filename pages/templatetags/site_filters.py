from django import template
from django.conf import settings

register = template.Library()


@register.filter
def absolute_url(value):
    """Prefix a site path with SITE_BASE_URL, with exactly one slash between them."""
    base = settings.SITE_BASE_URL.rstrip("/")
    path = str(value or "").lstrip("/")
    return f"{base}/{path}"


def _wrap(value, kind):
    formats = getattr(settings, "SITE_IMAGE_FORMATS", {}) or {}
    if not value:
        return ""
    return f"{formats.get(kind + '_prefix', '')}{value}{formats.get(kind + '_suffix', '')}"


@register.filter
def opengraph(value):
    """Image url in the OpenGraph format (SITE_IMAGE_FORMATS opengraph_prefix/suffix)."""
    return _wrap(value, "opengraph")


@register.filter
def teaser(value):
    """Image url in the teaser format (SITE_IMAGE_FORMATS teaser_prefix/suffix)."""
    return _wrap(value, "teaser")
