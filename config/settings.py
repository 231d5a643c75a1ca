import os
from pathlib import Path
from dotenv import load_dotenv

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env file
load_dotenv(BASE_DIR / ".env")

# Django Security
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-secret")
DEBUG = os.getenv("DEBUG", "1") == "1"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "*").split(",")

# Installed Apps
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "x509auth.apps.X509AuthConfig",
]

# Middleware
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "utils.cert_middleware.X509AuthMiddleware",
]

ROOT_URLCONF = "config.urls"

WSGI_APPLICATION = "config.wsgi.application"

# No persisted state
DATABASES = {}

# Mount path when served below a prefix (e.g. /app)
FORCE_SCRIPT_NAME = os.getenv("FORCE_SCRIPT_NAME") or None

USE_TZ = True
TIME_ZONE = "UTC"

# DRF (identity comes from the client certificate, not DRF authentication)
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "UNAUTHENTICATED_USER": None,
}

# X509 client certificate authentication
X509_AUTH = {
    "ENFORCE_POLICY": os.getenv("X509_ENFORCE_POLICY", "x509auth.policy.SettingsEnforcementPolicy"),
    "ENFORCE": os.getenv("X509_ENFORCE", "0"),
    "CERT_CONTAINS": os.getenv("X509_CERT_CONTAINS") or None,
    "PATHS": os.getenv("X509_PATHS") or None,
    "CONTEXT_PATH": os.getenv("X509_CONTEXT_PATH"),
    "CERT_HEADER": os.getenv("X509_CERT_HEADER") or None,
}

# Logging Level
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "x509auth": {"handlers": ["console"], "level": LOG_LEVEL},
        "utils": {"handlers": ["console"], "level": LOG_LEVEL},
    },
}

# Respect proxy headers when running behind a reverse proxy.
USE_X_FORWARDED_HOST = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
