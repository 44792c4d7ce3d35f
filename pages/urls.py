import re

from django.conf import settings
from django.urls import path, re_path
from django.views.generic import RedirectView

from . import views
from .feeds import LatestPostsFeed

app_name = "pages"

urlpatterns = [
    path("", views.home, name="home"),
    path("index.xml", LatestPostsFeed(), name="feed"),
    path("posts/", views.posts, name="posts"),
    path("archive/", views.archive, name="archive"),
]

# Moved pages answer with a permanent redirect, with or without a trailing slash
urlpatterns += [
    re_path(r"^%s/?$" % re.escape(source.strip("/")), RedirectView.as_view(url=target, permanent=True))
    for source, target in getattr(settings, "SITE_REDIRECTS", {}).items()
]

urlpatterns += [
    # Posts live at the site root under their front matter url
    path("<slug:slug>/", views.post, name="post"),
]
