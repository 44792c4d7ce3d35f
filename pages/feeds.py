from django.conf import settings
from django.contrib.syndication.views import Feed
from django.urls import reverse

from .models import Post


class LatestPostsFeed(Feed):
    """RSS for the home page: the newest published posts, summaries only."""

    link = "/"
    limit = 20

    def title(self):
        return settings.SITE_TITLE

    def description(self):
        return f"Latest posts from {settings.SITE_TITLE}"

    def items(self):
        return Post.objects.filter(is_published=True).prefetch_related("authorships__author")[: self.limit]

    def item_title(self, item):
        return item.title

    def item_description(self, item):
        return item.summary

    def item_link(self, item):
        return reverse("pages:post", args=[item.slug])

    def item_pubdate(self, item):
        return item.date

    def item_updateddate(self, item):
        return item.modified or item.date

    def item_author_name(self, item):
        names = [a.name for a in item.ordered_authors()]
        return ", ".join(names) or None

    def item_categories(self, item):
        return [c.name for c in item.categories.all()]
