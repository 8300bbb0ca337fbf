"""
Django settings for the qparams project
"""

from pathlib import Path
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# =======================
# ENVIRONMENT DETECTION
# =======================

BASE_DIR = Path(__file__).resolve().parent.parent

IS_PRODUCTION = os.getenv('DJANGO_ENV') == 'production'

# =======================
# SECURITY & CORE SETTINGS
# =======================

SECRET_KEY = os.getenv('SECRET_KEY')
if not SECRET_KEY:
    if IS_PRODUCTION:
        raise Exception("SECRET_KEY must be set in production!")
    else:
        SECRET_KEY = 'dev-key-only-for-local-development-change-in-production'

DEBUG = os.getenv('DEBUG', 'False').lower() == 'true' and not IS_PRODUCTION

if IS_PRODUCTION:
    ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', '').split(',') if h.strip()]
else:
    ALLOWED_HOSTS = ['*']

# =======================
# INSTALLED APPS
# =======================

INSTALLED_APPS = [
    'django.contrib.staticfiles',

    'core',
]

# =======================
# MIDDLEWARE
# =======================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'qparams.urls'

# =======================
# TEMPLATES
# =======================

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'core.context_processors.query_params',
            ],
        },
    },
]

WSGI_APPLICATION = 'qparams.wsgi.application'

# =======================
# DATABASE
# =======================

# Query string transformations are stateless; nothing is stored
DATABASES = {}

# =======================
# INTERNATIONALIZATION
# =======================

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# =======================
# STATIC FILES
# =======================

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage'
        if IS_PRODUCTION else 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

# =======================
# QUERY STRING HELPERS
# =======================

# Characters left unencoded when parameters are serialized (keeps tag[]=a readable)
QUERY_PARAMS_SAFE_CHARS = os.getenv('QUERY_PARAMS_SAFE_CHARS', '[]')

# =======================
# LOGGING
# =======================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
