"""
Django settings for the destination planner backend.

Values are read from the environment; every default below is safe for local development.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-insecure-change-me')

DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() == 'true'

ALLOWED_HOSTS = [host for host in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if host]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'core',
    'locations',
    'trips',
    'recommendations',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

# PostgreSQL in deployed environments, SQLite otherwise
if os.environ.get('POSTGRES_DB'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.environ['POSTGRES_DB'],
            'USER': os.environ.get('POSTGRES_USER', 'postgres'),
            'PASSWORD': os.environ.get('POSTGRES_PASSWORD', ''),
            'HOST': os.environ.get('POSTGRES_HOST', 'localhost'),
            'PORT': os.environ.get('POSTGRES_PORT', '5432'),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

REST_FRAMEWORK = {
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 20,
}

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'locations': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'trips': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'recommendations': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}

# Itinerary planning
ITINERARY_DEFAULT_POIS_PER_DAY = 3
# POI pools are shuffled once at fetch time; the allocator itself never shuffles
ITINERARY_RANDOMIZE_POIS = os.environ.get('ITINERARY_RANDOMIZE_POIS', 'true').lower() == 'true'

# Destination scoring
DESTINATION_DEFAULT_WEIGHTS = {'food': 0.33, 'attractions': 0.33, 'hotels': 0.34}
DESTINATION_FEATURES_DEFAULT_LIMIT = 20
DESTINATION_SAMPLE_ATTRACTIONS = 5

# City recommendation lists
RECOMMENDATIONS_DEFAULT_LIMIT = 10
WARM_BUDGET_DEFAULT_MIN_TEMP = 18.0
WARM_BUDGET_POI_THRESHOLD = 3
BALANCED_DEFAULT_LIMIT = 20
# cities with any hotel rated below this are never "best"
BEST_CITIES_MIN_HOTEL_RATING = 2.5

# Flight availability
AVAILABILITY_DEFAULT_MAX_STOPS = 1
AVAILABILITY_DEFAULT_LIMIT = 20
