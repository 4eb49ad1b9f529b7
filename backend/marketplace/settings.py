import os
import sys
from datetime import timedelta
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent
# Try root project .env (one directory up from BASE_DIR) first, then local
root_env = (BASE_DIR.parent / '.env')
local_env = (BASE_DIR / '.env')
if root_env.exists():
    load_dotenv(root_env)
elif local_env.exists():
    load_dotenv(local_env)

# ---------------------------------------------------------------------------
# SECRET KEY HANDLING
# Prefer DJANGO_SECRET_KEY, fall back to SECRET_KEY.
# In production (DEBUG=False) we require a non-default, non-empty key.
# ---------------------------------------------------------------------------
_candidate_key = (
    os.getenv('DJANGO_SECRET_KEY')
    or os.getenv('SECRET_KEY')
    or ''
)

SECRET_KEY = _candidate_key if _candidate_key else 'dev-secret-key'
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')

if (not SECRET_KEY or SECRET_KEY == 'dev-secret-key') and not DEBUG:
    raise ImproperlyConfigured(
        'SECRET_KEY is missing or using insecure default. Set DJANGO_SECRET_KEY or SECRET_KEY env var.'
    )

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_spectacular',
    'apps.common',
    'apps.users',
    'apps.catalog',
    'apps.carts',
    'apps.orders',
    'apps.checkout',
    'apps.notifications',
    'apps.preferences',
]

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'apps.api.exceptions.global_exception_handler',
}

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=int(os.getenv('JWT_ACCESS_MINUTES', '30'))),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=int(os.getenv('JWT_REFRESH_DAYS', '7'))),
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'AngoPlace API',
    'DESCRIPTION': 'Marketplace backend: catalog, cart, checkout, orders and notifications.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
    'COMPONENT_SPLIT_REQUEST': True,
    'SCHEMA_PATH_PREFIX': r'/api',
}

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'marketplace.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'marketplace.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.getenv('POSTGRES_DB', 'marketplace'),
        'USER': os.getenv('POSTGRES_USER', 'marketplace'),
        'PASSWORD': os.getenv('POSTGRES_PASSWORD', 'marketplace'),
        'HOST': os.getenv('POSTGRES_HOST', 'db'),
        'PORT': os.getenv('POSTGRES_PORT', '5432'),
    }
}

# Redis backs the product list cache. Cache outages are ignored so they never
# block request handling.
REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/1')
CACHE_TTL = int(os.getenv('CACHE_TTL', '300'))  # seconds

CACHES = {
    'default': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': REDIS_URL,
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            'IGNORE_EXCEPTIONS': True,
        },
        'KEY_PREFIX': os.getenv('CACHE_KEY_PREFIX', 'marketplace'),
        'TIMEOUT': CACHE_TTL,
    }
}

# Use SQLite for tests to simplify CI/dev without Postgres
USING_PYTEST = (
    os.getenv('PYTEST_CURRENT_TEST') is not None
    or any(os.path.basename(arg).startswith('pytest') for arg in sys.argv)
    or 'pytest' in sys.modules
)

if 'test' in sys.argv or USING_PYTEST:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'marketplace-test-cache',
            'TIMEOUT': 60,
        }
    }

AUTH_PASSWORD_VALIDATORS = []

LANGUAGE_CODE = 'pt'
LANGUAGES = [
    ('pt', 'Português'),
    ('en', 'English'),
]
TIME_ZONE = os.getenv('TIME_ZONE', 'Africa/Luanda')
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = os.getenv('STATIC_ROOT', str(BASE_DIR / 'staticfiles'))
MEDIA_URL = os.getenv('MEDIA_URL', '/media/')
MEDIA_ROOT = os.getenv('MEDIA_ROOT', str(BASE_DIR / 'media'))
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_USER_MODEL = 'users.User'

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True,
        },
    },
}

# ---------------------------------------------------------------------------
# Commerce rules
# ---------------------------------------------------------------------------
CART_FREE_SHIPPING_THRESHOLD = Decimal(os.getenv('CART_FREE_SHIPPING_THRESHOLD', '100000'))
CART_SHIPPING_FLAT_FEE = Decimal(os.getenv('CART_SHIPPING_FLAT_FEE', '2500'))
# "replace": newest option selection wins on re-add; "reject": conflicting
# selections raise OptionConflictError.
CART_OPTION_MERGE_POLICY = os.getenv('CART_OPTION_MERGE_POLICY', 'replace')
if CART_OPTION_MERGE_POLICY not in ('replace', 'reject'):
    raise ImproperlyConfigured(
        'CART_OPTION_MERGE_POLICY must be "replace" or "reject".'
    )

# Checkout attempts and their countdown timers live in this process's memory
# (apps.checkout.container.attempt_registry). Serve the API from one worker
# process, or route every /api/checkout/ request to the same one; the
# checkout.W001 system check warns when WEB_CONCURRENCY asks for more.
CHECKOUT_WORKER_PROCESSES = int(os.getenv('WEB_CONCURRENCY', '1'))
CHECKOUT_COUNTDOWN_SECONDS = int(os.getenv('CHECKOUT_COUNTDOWN_SECONDS', '120'))
CHECKOUT_PHONE_DIGITS = int(os.getenv('CHECKOUT_PHONE_DIGITS', '9'))
CHECKOUT_PHONE_COUNTRY_CODE = os.getenv('CHECKOUT_PHONE_COUNTRY_CODE', '244')
PAYMENT_CALLBACK_TOKEN = os.getenv('PAYMENT_CALLBACK_TOKEN', '')

SEARCH_HISTORY_LIMIT = int(os.getenv('SEARCH_HISTORY_LIMIT', '10'))
NOTIFICATIONS_PAGE_SIZE = int(os.getenv('NOTIFICATIONS_PAGE_SIZE', '20'))
CHECKOUT_PROOF_MAX_BYTES = int(os.getenv('CHECKOUT_PROOF_MAX_BYTES', str(5 * 1024 * 1024)))
# Dotted paths to the payment collaborators; the simulated ones accept every request.
CHECKOUT_PAYMENT_GATEWAY = os.getenv(
    'CHECKOUT_PAYMENT_GATEWAY', 'apps.checkout.gateways.SimulatedPaymentGateway'
)
CHECKOUT_TRANSFER_VERIFIER = os.getenv(
    'CHECKOUT_TRANSFER_VERIFIER', 'apps.checkout.gateways.SimulatedTransferVerifier'
)

# Optional dotted path to a search suggestion provider class exposing
# suggest(query, limit). Empty disables advisory suggestions.
CATALOG_SUGGESTION_PROVIDER = os.getenv('CATALOG_SUGGESTION_PROVIDER', '')
