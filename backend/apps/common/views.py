import time
import uuid

from django.core.cache import cache
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _cache_check():
    started = time.time()
    probe_key = f'health:{uuid.uuid4().hex}'
    try:
        cache.set(probe_key, 'ok', timeout=5)
        value = cache.get(probe_key)
        cache.delete(probe_key)
    except Exception as e:  # broad: cache backends raise driver-specific errors
        logger.warning('Cache health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}
    latency = round((time.time() - started) * 1000, 2)
    if value != 'ok':
        # django-redis ignores exceptions, so an outage shows up as a miss
        logger.warning('Cache health check returned no value')
        return {'status': 'fail', 'error': 'cache unavailable'}
    logger.debug('Cache health check succeeded', latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _db_check(alias='default'):
    started = time.time()
    try:
        conn = connections[alias]
        conn.cursor().execute('SELECT 1')
        latency = round((time.time() - started) * 1000, 2)
        logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
        return {'status': 'ok', 'latency_ms': latency}
    except OperationalError as e:
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    except Exception as e:  # broad: mocked failures, driver bugs
        logger.error('Database health check failed unexpectedly', alias=alias, error=str(e), exception=e.__class__.__name__)
        return {'status': 'fail', 'error': str(e), 'exception': e.__class__.__name__}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: database must answer; a cache outage only degrades."""
    checks = {
        'database': _db_check(),
        'cache': _cache_check(),
    }
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 503 if 'database' in failing else 200
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse({'status': overall_status, 'checks': checks}, status=http_status)
