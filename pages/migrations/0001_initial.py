import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(db_index=True, unique=True)),
                ("name", models.CharField(max_length=80, unique=True)),
            ],
            options={"ordering": ["name"], "verbose_name_plural": "categories"},
        ),
        migrations.CreateModel(
            name="Author",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(db_index=True, unique=True)),
                ("name", models.CharField(max_length=120)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(db_index=True, max_length=255, unique=True)),
                ("doc_key", models.CharField(max_length=64, unique=True)),
                ("title", models.CharField(max_length=240)),
                ("summary", models.TextField(blank=True)),
                ("body_html", models.TextField()),
                ("content_hash", models.CharField(db_index=True, max_length=64)),
                ("version", models.IntegerField(default=0)),
                ("date", models.DateTimeField(db_index=True)),
                ("modified", models.DateTimeField(blank=True, null=True)),
                ("image", models.CharField(blank=True, max_length=255)),
                ("source_path", models.CharField(blank=True, max_length=500)),
                ("is_published", models.BooleanField(db_index=True, default=True)),
                ("pushed_hash", models.CharField(blank=True, default="", max_length=64)),
                ("pushed_at", models.DateTimeField(blank=True, null=True)),
                ("categories", models.ManyToManyField(blank=True, related_name="posts", to="pages.category")),
            ],
            options={"ordering": ["-date", "-id"]},
        ),
        migrations.CreateModel(
            name="Authorship",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0)),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="pages.author")),
                ("post", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="authorships", to="pages.post")),
            ],
            options={"ordering": ["position"]},
        ),
        migrations.AddField(
            model_name="post",
            name="authors",
            field=models.ManyToManyField(blank=True, related_name="posts", through="pages.Authorship", to="pages.author"),
        ),
        migrations.AddConstraint(
            model_name="authorship",
            constraint=models.UniqueConstraint(fields=("post", "author"), name="unique_post_author"),
        ),
    ]
