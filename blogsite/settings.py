"""
Django settings for the blog corpus site.

Every deploy-specific value comes from a BLOG_* environment variable; the
defaults are for local development against ./content.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("BLOG_SECRET_KEY", "dev-only-not-a-secret")
DEBUG = env_bool("BLOG_DEBUG", True)
ALLOWED_HOSTS = [h for h in os.environ.get("BLOG_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "rest_framework.authtoken",
    "pages",
    "contentapi",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "blogsite.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "pages.context_processors.site_nav",
            ],
        },
    },
]

WSGI_APPLICATION = "blogsite.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("BLOG_DATABASE", str(BASE_DIR / "content.db")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}

# Corpus
POSTS_ROOT = Path(os.environ.get("BLOG_POSTS_ROOT", str(BASE_DIR / "content"))).expanduser()
POSTS_IGNORE = {"drafts", "README.md"}

# Site
SITE_TITLE = os.environ.get("BLOG_SITE_TITLE", "Reflectoring - Where the HOW meets the WHY")
SITE_BASE_URL = os.environ.get("BLOG_BASE_URL", "http://localhost:1313")
SITE_PAGINATE = 6
SITE_SUMMARY_WORDS = 20
SITE_IMAGE_FORMATS = {
    "opengraph_prefix": "/images/og/",
    "opengraph_suffix": "",
    "teaser_prefix": "/images/teaser/",
    "teaser_suffix": "",
}

# Permanent redirects for moved pages, source path to target
SITE_REDIRECTS = {
    "/feed.xml": "/index.xml",
    "/e/book/": "/book",
    "/get-your-hands-dirty-on-clean-architecture": "/book",
    "/newsletters": "/simplify",
    "/mailing-list": "/simplify",
    "/review-clean-architecture": "/book-review-clean-architecture",
    "/review-java-by-comparison": "/book-review-java-by-comparison",
    "/review-your-code-as-a-crime-scene": "/book-review-your-code-as-a-crime-scene",
    "/spring-boot-testcontainers": "/spring-boot-flyway-testcontainers",
    "/spring-data-mvc-pagination": "/spring-boot-paging",
    "/tracing-with-spring-cloud-sleuth": "/spring-boot-tracing",
    "/write-for-me": "/contribute/become-an-author",
    "/write-with-me": "/contribute/become-an-author",
    "/2022-03-15-feature-flags-make-or-buy": "/feature-flags-make-or-buy",
    "/javaland": "https://thombergs.gumroad.com/l/gyhdoca/javaland",
    "/100-percent-test-coverage": "/percent-test-coverage",
    "/advertisement": "/advertise",
}

# Remote content API used by push_posts
CONTENT_API_URL = os.environ.get("BLOG_CONTENT_API_URL", "")
CONTENT_API_TOKEN = os.environ.get("BLOG_CONTENT_API_TOKEN", "")

LOG_LEVEL = os.environ.get("BLOG_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "corpus": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "pages": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "contentapi": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
