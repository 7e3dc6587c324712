"""
Django settings for joblify project.
"""
from pathlib import Path
import os
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-joblify-8m#t2q!v0x@c4k^z7w$r1p&n5s*d3f-change-me")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

_default_allowed_hosts = ["127.0.0.1", "localhost", "testserver"]
ALLOWED_HOSTS = (
    os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",")
    if os.getenv("DJANGO_ALLOWED_HOSTS")
    else _default_allowed_hosts
)

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "accounts",
    "jobs",
    "resumes",
    "subscriptions",
    "chat",
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

ROOT_URLCONF = "joblify.urls"

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
    }
]

WSGI_APPLICATION = "joblify.wsgi.application"

# -----------------------------
# Database (PostgreSQL)
# -----------------------------
DB_ENGINE = os.getenv("DB_ENGINE", "django.db.backends.postgresql").strip()
if DB_ENGINE in {"sqlite", "sqlite3", "django.db.backends.sqlite3"}:
    # Local development only; constraints with conditions behave the same way.
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.getenv("DB_NAME", str(BASE_DIR / "joblify.sqlite3")),
        }
    }
elif DB_ENGINE == "django.db.backends.postgresql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("DB_NAME", "joblify_db"),
            "USER": os.getenv("DB_USER", "joblify_user"),
            "PASSWORD": os.getenv("DB_PASSWORD", "YourStrongPassHere"),
            "HOST": os.getenv("DB_HOST", "127.0.0.1"),
            "PORT": os.getenv("DB_PORT", "5432"),
        }
    }
else:
    raise ImproperlyConfigured(
        "Unsupported DB_ENGINE. Use django.db.backends.postgresql (or sqlite3 for local work)."
    )

# -----------------------------
# Custom User Model
# -----------------------------
AUTH_USER_MODEL = "accounts.User"

# -----------------------------
# Session management
# -----------------------------
# 24 hour default session age (can be overridden)
SESSION_COOKIE_AGE = int(os.getenv("SESSION_COOKIE_AGE", str(24 * 60 * 60)))
SESSION_SAVE_EVERY_REQUEST = True
SESSION_EXPIRE_AT_BROWSER_CLOSE = False
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Lax"
SESSION_COOKIE_SECURE = not DEBUG

# -----------------------------
# Password validation
# -----------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 8}},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("DJANGO_TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------
# Workflow knobs
# -----------------------------
JOBLIFY = {
    "INVITATION_TTL_DAYS": int(os.getenv("JOBLIFY_INVITATION_TTL_DAYS", "30")),
    # Applicants join a chat-enabled post's chat area as soon as they apply.
    # When off, only an ACCEPTED application grants membership.
    "CHAT_ENROLL_ON_APPLY": os.getenv("JOBLIFY_CHAT_ENROLL_ON_APPLY", "1") == "1",
    "DEFAULT_PAGE_SIZE": int(os.getenv("JOBLIFY_DEFAULT_PAGE_SIZE", "10")),
    "MAX_PAGE_SIZE": int(os.getenv("JOBLIFY_MAX_PAGE_SIZE", "100")),
}

# -----------------------------
# Logging
# -----------------------------
LOG_DIR = BASE_DIR / "logs"
LOG_DIR.mkdir(exist_ok=True)
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "[{levelname}] {asctime} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
        "file": {
            "class": "logging.FileHandler",
            "filename": str(LOG_DIR / "joblify.log"),
            "formatter": "standard",
            "level": "INFO",
        },
    },
    "root": {"handlers": ["console", "file"], "level": os.getenv("LOG_LEVEL", "INFO")},
}
