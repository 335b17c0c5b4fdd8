"""
Django settings for the restaurant_ops project.

Values are read from environment variables so the same module serves local
development, tests and deployment.
"""

import json
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-restaurant-ops-dev-key")

DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")

ALLOWED_HOSTS = [
    h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "pos",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "restaurant_ops.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "restaurant_ops.wsgi.application"

# Mapping of Django database keys to their corresponding environment variables
_DB_ENV_VARS = {
    "ENGINE": "DB_ENGINE",
    "NAME": "DB_NAME",
    "USER": "DB_USER",
    "PASSWORD": "DB_PASSWORD",
    "HOST": "DB_HOST",
    "PORT": "DB_PORT",
}


def load_db_config():
    """Return database configuration from the environment, else SQLite."""
    env_config = {k: os.getenv(env) for k, env in _DB_ENV_VARS.items()}
    if all(env_config.values()):
        return env_config
    return {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("SQLITE_PATH", str(BASE_DIR / "db.sqlite3")),
    }


DATABASES = {"default": load_db_config()}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
]

LANGUAGE_CODE = "en-gb"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.BasicAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "EXCEPTION_HANDLER": "pos.exceptions.custom_exception_handler",
}

# Point-of-sale data store: "django" (ORM) or "supabase" (hosted tables).
POS_DATA_STORE = os.getenv("POS_DATA_STORE", "django")

# Attempts at the conditional stock write before a line is reported as failed.
POS_STOCK_UPDATE_ATTEMPTS = int(os.getenv("POS_STOCK_UPDATE_ATTEMPTS", "5"))

POS_SUPABASE_TABLES = {
    "menu_items": "menu_items",
    "ingredients": "ingredients",
    "sales": "sales",
}
POS_SUPABASE_TABLES.update(json.loads(os.getenv("POS_SUPABASE_TABLES", "{}")))
