from pathlib import Path
import os
import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default="False"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# =========================
# Core
# =========================
DEBUG = env_bool("DEBUG")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-secret-change-me")

ALLOWED_HOSTS = [
    h.strip() for h in os.getenv(
        "ALLOWED_HOSTS",
        "127.0.0.1,localhost,testserver"
    ).split(",") if h.strip()
]

CSRF_TRUSTED_ORIGINS = [
    o.strip() for o in os.getenv(
        "CSRF_TRUSTED_ORIGINS",
        "http://127.0.0.1,http://localhost,http://127.0.0.1:8000,http://localhost:8000"
    ).split(",") if o.strip()
]

# =========================
# Apps
# =========================
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "shop",
]

# =========================
# Middleware
# =========================
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

# =========================
# Templates (solo admin)
# =========================
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# =========================
# Database
# =========================
DATABASES = {
    "default": dj_database_url.config(
        default=os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
        conn_max_age=600,
    )
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =========================
# Auth / admin session
# =========================
AUTHENTICATION_BACKENDS = [
    "shop.backends.AdminAccountsBackend",
    "django.contrib.auth.backends.ModelBackend",
]

# Cuentas de administración configuradas por entorno: (usuario, contraseña)
ADMIN_ACCOUNTS = [
    (os.getenv(user_var), os.getenv(pass_var))
    for user_var, pass_var in (
        ("ADMIN_USERNAME", "ADMIN_PASSWORD"),
        ("ADMIN_USERNAME2", "ADMIN_PASSWORD2"),
    )
    if os.getenv(user_var) and os.getenv(pass_var)
]

SESSION_COOKIE_AGE = int(os.getenv("SESSION_COOKIE_AGE", 60 * 60))
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Strict"
SESSION_COOKIE_SECURE = not DEBUG and env_bool("SESSION_COOKIE_SECURE", "True")

# =========================
# Internationalization
# =========================
LANGUAGE_CODE = "es"
TIME_ZONE = "America/Bogota"
USE_I18N = True
USE_TZ = True

# =========================
# Static files
# =========================
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}
WHITENOISE_MANIFEST_STRICT = False

# =========================
# Email
# =========================
EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", 465))
EMAIL_HOST_USER = os.getenv("EMAIL_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_PASS", "")
EMAIL_USE_SSL = env_bool("EMAIL_USE_SSL", "True")
EMAIL_TIMEOUT = int(os.getenv("EMAIL_TIMEOUT", 20))
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", f"AntojitosQuin <{EMAIL_HOST_USER or 'no-reply@antojitosquin.com'}>")

# =========================
# Tienda
# =========================
SHOP_NAME = os.getenv("SHOP_NAME", "AntojitosQuin")
SHOP_ORDER_BCC = [
    a.strip() for a in os.getenv("SHOP_ORDER_BCC", "").split(",") if a.strip()
]
SHOP_EMAIL_BACKGROUND = env_bool("SHOP_EMAIL_BACKGROUND", "True")
SHOP_STRICT_STATUS_TRANSITIONS = env_bool("SHOP_STRICT_STATUS_TRANSITIONS")
SHOP_SEED_FILE = os.getenv("SHOP_SEED_FILE", str(BASE_DIR / "shop" / "fixtures" / "products.json"))

# =========================
# Logging
# =========================
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "shop": {
            "handlers": ["console"],
            "level": os.getenv("SHOP_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
