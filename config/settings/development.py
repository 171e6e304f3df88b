"""
Django Settings - Development Configuration
"""

from .base import *

DEBUG = True

# ALLOWED_HOSTS is set in base.py based on DEBUG flag (accepts all hosts in dev)

# SQL logging, opt-in
if config("LOG_SQL", default=False, cast=bool):
    LOGGING["loggers"]["django.db.backends"] = {
        "handlers": ["console"],
        "level": "DEBUG",
        "propagate": False,
    }

LOGGING["loggers"]["apps"]["level"] = "DEBUG"

# Browsable API is handy while building the UI
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [
    "apps.core.renderers.StandardJSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]

# Plain static storage so runserver works without collectstatic
STORAGES["staticfiles"] = {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"}
