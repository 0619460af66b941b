"""
Django settings for the bantam project.

Only what the render helpers need: the template engine, i18n/timezone
defaults used by ``format_date`` / ``format_number`` and the helper config.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "bantam-insecure-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "true").lower() == "true"

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "render_helpers",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
    },
]

LANGUAGE_CODE = "en-gb"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Render helpers read BANTAM_HELPERS when set, see render_helpers.conf.DEFAULTS

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "render_helpers": {
            "handlers": ["console"],
            "level": os.environ.get("BANTAM_HELPERS_LOG_LEVEL", "WARNING"),
        },
    },
}
