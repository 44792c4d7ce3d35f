from __future__ import annotations

from django.conf import settings
from django.core.paginator import Paginator
from django.http import Http404
from django.shortcuts import render

from corpus.render import extract_outline

from .models import Author, Category, Post
from .nav import build_archive_tree, breadcrumbs


def _published():
    return Post.objects.filter(is_published=True).prefetch_related("categories", "authorships__author")


def home(request):
    latest = _published()[: settings.SITE_PAGINATE]
    return render(request, "pages/home.html", {"posts": latest, "breadcrumbs": breadcrumbs()})


def posts(request):
    category = (request.GET.get("category") or "all").lower()
    author = (request.GET.get("author") or "").lower()

    qs = _published()
    if category != "all":
        qs = qs.filter(categories__slug=category)
    if author:
        qs = qs.filter(authors__slug=author)

    page = Paginator(qs.distinct(), settings.SITE_PAGINATE).get_page(request.GET.get("page"))

    category_labels = {"all": "All", **{c.slug: c.name for c in Category.objects.all()}}
    ctx = {
        "page": page,
        "posts": page.object_list,
        "category": category,
        "category_labels": category_labels,
        "heading": "Posts" if category == "all" else category_labels.get(category, "Posts"),
        "author": Author.objects.filter(slug=author).first() if author else None,
        "breadcrumbs": breadcrumbs(("Posts", request.path)),
    }
    return render(request, "pages/posts.html", ctx)


def archive(request):
    tree = build_archive_tree(Post.objects.filter(is_published=True).only("slug", "title", "date"))
    return render(request, "pages/archive.html", {"tree": tree, "breadcrumbs": breadcrumbs(("Archive", request.path))})


def post(request, slug: str):
    try:
        p = _published().get(slug=slug)
    except Post.DoesNotExist:
        raise Http404("Post not found")
    ctx = {
        "post": p,
        "authors": p.ordered_authors(),
        "outline": extract_outline(p.body_html),
        "breadcrumbs": breadcrumbs((p.title, request.path)),
    }
    return render(request, "pages/post.html", ctx)
