from __future__ import annotations

from typing import Iterable, Optional

from django import template

register = template.Library()


@register.inclusion_tag("pages/widgets/authors.html", takes_context=True)
def authors_widget(context, title: str = "Written by", authors: Optional[Iterable] = None):
    """Author box for a post, in front matter order."""
    author_list = list(authors) if authors is not None else list(context.get("authors") or [])
    return {"title": title, "authors": author_list}


@register.inclusion_tag("pages/widgets/categories.html", takes_context=True)
def categories_widget(context, title: str = "Categories", category: str | None = None, category_labels: dict | None = None, url_name: str = "pages:posts"):
    """Category filter widget for the posts index."""
    labels = category_labels if category_labels is not None else (context.get("category_labels") or {})
    current = category if category is not None else context.get("category")
    return {"title": title, "category_labels": labels, "current_category": current, "url_name": url_name}


@register.inclusion_tag("pages/widgets/toc.html", takes_context=True)
def toc_widget(context, title: str = "Contents", outline=None):
    """Table of contents built from the post's h2-h4 headings."""
    headings = outline if outline is not None else (context.get("outline") or [])
    return {"title": title, "outline": headings}


@register.inclusion_tag("pages/widgets/navigator.html", takes_context=True)
def navigator_widget(context, title: str = "Path", breadcrumbs=None, back_label: str | None = None, back_url: str | None = None):
    """Breadcrumb/path widget (or a simple back link)."""
    crumbs = breadcrumbs if breadcrumbs is not None else context.get("breadcrumbs")
    return {"title": title, "breadcrumbs": crumbs, "back_label": back_label, "back_url": back_url}
