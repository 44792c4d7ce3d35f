from django.conf import settings

from .models import Category


def site_nav(request):
    return {
        "site_title": settings.SITE_TITLE,
        "site_categories": Category.objects.filter(posts__is_published=True).distinct(),
    }
