from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from typing import Iterable

from django.urls import reverse


@dataclass
class NavNode:
    title: str
    url: str
    children: list["NavNode"] = field(default_factory=list)


def build_archive_tree(posts: Iterable) -> list[NavNode]:
    """Year -> month -> post navigation, newest first. Expects posts with slug, title and date."""
    years: dict[int, dict[int, list]] = {}
    for p in posts:
        years.setdefault(p.date.year, {}).setdefault(p.date.month, []).append(p)

    archive_url = reverse("pages:archive")
    tree: list[NavNode] = []
    for year in sorted(years, reverse=True):
        months = []
        for month in sorted(years[year], reverse=True):
            entries = sorted(years[year][month], key=lambda p: p.date, reverse=True)
            months.append(NavNode(
                title=calendar.month_name[month],
                url=f"{archive_url}#{year}-{month:02d}",
                children=[NavNode(title=p.title, url=reverse("pages:post", args=[p.slug])) for p in entries],
            ))
        tree.append(NavNode(title=str(year), url=f"{archive_url}#{year}", children=months))
    return tree


def breadcrumbs(*trail: tuple[str, str]) -> list[tuple[str, str]]:
    return [("Home", reverse("pages:home")), *trail]
