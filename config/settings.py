"""
Django settings for the grading backend.

Values come from the environment; defaults are meant for development only.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    return os.environ.get(name, str(default)).lower() in ("1", "true", "yes", "on")


def env_list(name, default=""):
    return [x.strip() for x in os.environ.get(name, default).split(",") if x.strip()]


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-secret-key")
DEBUG = env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "django_filters",
    "accounts",
    "core",
    "enrollments",
    "assessments",
    "grading",
    "reports",
    "analytics",
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

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

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

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DJANGO_DB_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

AUTH_USER_MODEL = "accounts.User"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.BasicAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
    "EXCEPTION_HANDLER": "grading.exceptions.grading_exception_handler",
}

LOG_LEVEL = os.environ.get("DJANGO_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "assessments": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "grading": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "reports": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

COLLEGE_NAME = os.environ.get("COLLEGE_NAME", "Your College")
COLLEGE_ADDRESS = os.environ.get("COLLEGE_ADDRESS", "")

# Paramètres de notation (grading/conf.py); surcharge par GRADING_<CLE>
GRADING = {
    "WEIGHTING_STRATEGY": os.environ.get("GRADING_WEIGHTING_STRATEGY", "composed_internal"),
    "INTERNAL_WEIGHT": os.environ.get("GRADING_INTERNAL_WEIGHT", "0.4"),
    "EXTERNAL_WEIGHT": os.environ.get("GRADING_EXTERNAL_WEIGHT", "0.6"),
    "CONTINUOUS_WEIGHT": os.environ.get("GRADING_CONTINUOUS_WEIGHT", "0.4"),
    "FINAL_EXAM_WEIGHT": os.environ.get("GRADING_FINAL_EXAM_WEIGHT", "0.6"),
    "ROUNDING": os.environ.get("GRADING_ROUNDING", "hundredths"),
    "PASS_MARK": os.environ.get("GRADING_PASS_MARK", "50"),
    "GOOD_STANDING_GPA": os.environ.get("GRADING_GOOD_STANDING_GPA", "3.0"),
    "FAILING_GRADES": env_list("GRADING_FAILING_GRADES", "F"),
    "DEGREE_CREDITS": int(os.environ.get("GRADING_DEGREE_CREDITS", "120")),
}
