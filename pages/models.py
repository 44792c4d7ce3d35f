from __future__ import annotations

from django.db import models


class Category(models.Model):
    slug = models.SlugField(unique=True, db_index=True)
    name = models.CharField(max_length=80, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Author(models.Model):
    slug = models.SlugField(unique=True, db_index=True)
    name = models.CharField(max_length=120)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Post(models.Model):
    slug = models.SlugField(max_length=255, unique=True, db_index=True)
    doc_key = models.CharField(max_length=64, unique=True)
    title = models.CharField(max_length=240)
    summary = models.TextField(blank=True)
    body_html = models.TextField()
    content_hash = models.CharField(max_length=64, db_index=True)
    version = models.IntegerField(default=0)
    date = models.DateTimeField(db_index=True)
    modified = models.DateTimeField(null=True, blank=True)
    image = models.CharField(max_length=255, blank=True)
    source_path = models.CharField(max_length=500, blank=True)
    is_published = models.BooleanField(default=True, db_index=True)

    pushed_hash = models.CharField(max_length=64, blank=True, default="")
    pushed_at = models.DateTimeField(null=True, blank=True)

    categories = models.ManyToManyField(Category, related_name="posts", blank=True)
    authors = models.ManyToManyField(Author, through="Authorship", related_name="posts", blank=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self) -> str:
        return self.title

    def ordered_authors(self) -> list[Author]:
        return [a.author for a in self.authorships.select_related("author")]


class Authorship(models.Model):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="authorships")
    author = models.ForeignKey(Author, on_delete=models.CASCADE)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["post", "author"], name="unique_post_author"),
        ]
