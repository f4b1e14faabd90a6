"""
Health Check Endpoints for the credentialing dashboard

Provides endpoints for:
- Liveness checks (is the app running?)
- Readiness checks (can the app serve requests?)
- Deep health checks (database, cache, audit log table)
"""

import time
import logging
from django.http import JsonResponse
from django.db import connection
from django.core.cache import cache
from django.views.decorators.http import require_GET
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)

VERSION = '1.0.0'


def _timed(check):
    """Run a check, returning (ok, latency_ms, error)"""
    start = time.time()
    try:
        ok = check()
        error = None if ok else 'check returned no result'
    except Exception as e:
        ok, error = False, str(e)
    latency = round((time.time() - start) * 1000, 2)
    return ok, latency, error


def _check_database():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        return cursor.fetchone() is not None


def _check_cache():
    cache_key = 'health_check_test'
    cache.set(cache_key, 'ok', 10)
    ok = cache.get(cache_key) == 'ok'
    cache.delete(cache_key)
    return ok


@csrf_exempt
@require_GET
def health_check(request):
    """
    Basic health check - returns 200 if app is running.
    Used by load balancers and container orchestration.
    """
    return JsonResponse({
        'status': 'healthy',
        'timestamp': time.time(),
    })


@csrf_exempt
@require_GET
def readiness_check(request):
    """
    Readiness check - verifies database and cache connectivity.
    """
    checks = {}
    errors = []
    for name, check in (('database', _check_database), ('cache', _check_cache)):
        ok, _, error = _timed(check)
        checks[name] = ok
        if error:
            errors.append(f'{name}: {error}')
            logger.error(f'Health check - {name} error: {error}')

    all_healthy = all(checks.values())
    return JsonResponse({
        'status': 'ready' if all_healthy else 'not_ready',
        'timestamp': time.time(),
        'checks': checks,
        'errors': errors or None,
    }, status=200 if all_healthy else 503)


@csrf_exempt
@require_GET
def deep_health_check(request):
    """
    Deep health check - readiness plus latencies and table counts.
    Use sparingly as it may be resource intensive.
    """
    from django.contrib.auth import get_user_model
    from audit.models import AuditLog

    checks = {}
    errors = []
    for name, check in (('database', _check_database), ('cache', _check_cache)):
        ok, latency, error = _timed(check)
        checks[name] = {'status': ok, 'latency_ms': latency if ok else None}
        if error:
            errors.append(f'{name}: {error}')
            logger.error(f'Deep health check - {name} error: {error}')

    try:
        checks['models'] = {
            'status': True,
            'details': {
                'users': get_user_model().objects.count(),
                'audit_logs': AuditLog.objects.count(),
            },
        }
    except Exception as e:
        checks['models'] = {'status': False, 'details': {}}
        errors.append(f'models: {e}')
        logger.error(f'Deep health check - Model error: {e}')

    # Model counts are informational; only connectivity decides the status
    all_healthy = checks['database']['status'] and checks['cache']['status']
    return JsonResponse({
        'status': 'healthy' if all_healthy else 'unhealthy',
        'timestamp': time.time(),
        'checks': checks,
        'errors': errors or None,
        'version': VERSION,
    }, status=200 if all_healthy else 503)


def get_health_urls():
    """
    Returns URL patterns for health endpoints.
    Add to your urls.py:
        from common.health import get_health_urls
        urlpatterns += get_health_urls()
    """
    from django.urls import path

    return [
        path('health/', health_check, name='health_check'),
        path('health/ready/', readiness_check, name='readiness_check'),
        path('health/deep/', deep_health_check, name='deep_health_check'),
    ]
