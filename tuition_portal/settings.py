# tuition_portal/settings.py - robuste et prêt pour prod/dev
import os
from pathlib import Path
from datetime import timedelta

import dj_database_url
from dotenv import load_dotenv

# Load local .env file
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=os.path.join(BASE_DIR, ".env"))

# ---------------------------
# Security / Debug
# ---------------------------
# Support both DJANGO_SECRET_KEY and SECRET_KEY env names
SECRET_KEY = (
    os.environ.get("DJANGO_SECRET_KEY")
    or os.environ.get("SECRET_KEY")
    or "fallback-dev-secret-key-please-change"
)

# Robust boolean parsing for DEBUG
def bool_from_env(key, default=False):
    val = os.environ.get(key)
    if val is None:
        return default
    return str(val).strip().lower() in ("1", "true", "yes", "on")

DEBUG = bool_from_env("DEBUG", default=True)

# ALLOWED_HOSTS: supports ALLOWED_HOSTS or DJANGO_ALLOWED_HOSTS env var
_env_hosts = os.environ.get("ALLOWED_HOSTS") or os.environ.get("DJANGO_ALLOWED_HOSTS") or ""
if _env_hosts:
    ALLOWED_HOSTS = [h.strip() for h in _env_hosts.split(",") if h.strip()]
else:
    # safe defaults for dev (testserver for the Django test client)
    ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]
_extra_host = os.environ.get("EXTRA_ALLOWED_HOST")
if _extra_host:
    ALLOWED_HOSTS.append(_extra_host.strip())

# ---------------------------
# Installed apps
# ---------------------------
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third party
    "corsheaders",
    "django_filters",
    "rest_framework",

    # Project apps
    "core",
    "fees",
    "submissions",
    "notifications",
]

# ---------------------------
# Middleware
# ---------------------------
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",               # should be high
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",         # static files in prod
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "core.middleware.shared_context.SharedContextMiddleware",
]

# ---------------------------
# CORS
# ---------------------------
# Accept several env formats: comma-separated OR space-separated
_env_cors = os.environ.get("CORS_ALLOWED_ORIGINS") or os.environ.get("CORS_ALLOWED_ORIGIN") or ""
CORS_ALLOWED_ORIGINS = []
if _env_cors:
    if "," in _env_cors:
        CORS_ALLOWED_ORIGINS = [u.strip() for u in _env_cors.split(",") if u.strip()]
    else:
        CORS_ALLOWED_ORIGINS = [u.strip() for u in _env_cors.split() if u.strip()]

# If no explicit origins and DEBUG True, allow all for dev convenience
CORS_ALLOW_ALL_ORIGINS = bool_from_env("CORS_ALLOW_ALL_ORIGINS", default=DEBUG and not CORS_ALLOWED_ORIGINS)
CORS_ALLOW_CREDENTIALS = bool_from_env("CORS_ALLOW_CREDENTIALS", default=False)
# le front lit le compteur de soumissions en attente depuis ce header
CORS_EXPOSE_HEADERS = ["X-Notification-Count", "X-User-Role"]

# ---------------------------
# URL / Templates / WSGI
# ---------------------------
ROOT_URLCONF = "tuition_portal.urls"

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
                "core.context_processors.shared",
            ],
        },
    },
]

WSGI_APPLICATION = "tuition_portal.wsgi.application"

# ---------------------------
# Database - robust handling
# ---------------------------
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL:
    ssl_require = bool_from_env("DB_SSL", default=not DEBUG)
    DATABASES = {
        "default": dj_database_url.parse(DATABASE_URL, conn_max_age=int(os.environ.get("DB_CONN_MAX_AGE", 600)), ssl_require=ssl_require)
    }
else:
    # Try individual Postgres env vars
    DB_NAME = os.environ.get("DB_NAME")
    DB_USER = os.environ.get("DB_USER")
    DB_PASS = os.environ.get("DB_PASSWORD") or os.environ.get("DB_PASS")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "5432")

    if DB_NAME and DB_USER:
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.postgresql",
                "NAME": DB_NAME,
                "USER": DB_USER,
                "PASSWORD": DB_PASS or "",
                "HOST": DB_HOST,
                "PORT": DB_PORT,
            }
        }
    else:
        # Final fallback to sqlite (local dev convenience)
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": os.path.join(BASE_DIR, "db.sqlite3"),
            }
        }

# ---------------------------
# Password validation
# ---------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# ---------------------------
# Internationalization
# ---------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# ---------------------------
# Static files (WhiteNoise)
# ---------------------------
STATIC_URL = os.environ.get("STATIC_URL", "/static/")
STATIC_ROOT = Path(os.environ.get("STATIC_ROOT", BASE_DIR / "staticfiles"))
_extra_static_dirs = os.environ.get("STATICFILES_DIRS", "")
if _extra_static_dirs:
    STATICFILES_DIRS = [BASE_DIR / p.strip() for p in _extra_static_dirs.split(",") if p.strip()]
else:
    STATICFILES_DIRS = []

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": os.environ.get("STATICFILES_STORAGE", "whitenoise.storage.CompressedManifestStaticFilesStorage"),
    },
}

# ---------------------------
# Default auto field
# ---------------------------
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ---------------------------
# Django REST framework + JWT
# ---------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=int(os.environ.get("JWT_ACCESS_HOURS", 100))),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=int(os.environ.get("JWT_REFRESH_DAYS", 7))),
    "AUTH_HEADER_TYPES": tuple(os.environ.get("JWT_AUTH_HEADER_TYPES", "Bearer").split(",")),
}

# ---------------------------
# Billing workflow
# ---------------------------
# taille de page par défaut du catalogue de frais (?per_page=)
FEE_CATALOG_PAGE_SIZE = int(os.environ.get("FEE_CATALOG_PAGE_SIZE", 15))
FEE_CATALOG_MAX_PAGE_SIZE = int(os.environ.get("FEE_CATALOG_MAX_PAGE_SIZE", 100))

# notifier l'élève quand ses soumissions sont acceptées
SUBMISSION_NOTIFY_ON_ACCEPT = bool_from_env("SUBMISSION_NOTIFY_ON_ACCEPT", default=True)

DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "no-reply@school.local")
EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")

# ---------------------------
# Production security hardening
# ---------------------------
if not DEBUG or bool_from_env("FORCE_SECURE", default=False):
    SECURE_SSL_REDIRECT = bool_from_env("SECURE_SSL_REDIRECT", default=True)
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

    if CORS_ALLOW_CREDENTIALS:
        SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "None")
        CSRF_COOKIE_SAMESITE = os.environ.get("CSRF_COOKIE_SAMESITE", "None")
    else:
        SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
        CSRF_COOKIE_SAMESITE = os.environ.get("CSRF_COOKIE_SAMESITE", "Lax")

    SECURE_HSTS_SECONDS = int(os.environ.get("SECURE_HSTS_SECONDS", 3600))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = bool_from_env("SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True)
    SECURE_HSTS_PRELOAD = bool_from_env("SECURE_HSTS_PRELOAD", default=True)
else:
    SECURE_SSL_REDIRECT = False

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
X_FRAME_OPTIONS = os.environ.get("X_FRAME_OPTIONS", "DENY")

# ---------------------------
# Logging - console friendly
# ---------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(levelname)s %(asctime)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django.request": {"handlers": ["console"], "level": "ERROR", "propagate": False},
        "submissions": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

HEALTHCHECK_URL = os.environ.get("HEALTHCHECK_URL", "/health/")

# End of settings.py
