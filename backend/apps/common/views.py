from django.http import JsonResponse
import time
from .db import QueryExecutionError, SQLGateway
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _db_check(alias='default'):
    started = time.time()
    try:
        ok = SQLGateway(alias).ping()
    except QueryExecutionError as e:
        cause = e.__cause__
        logger.warning('Database health check failed', alias=alias, error=str(cause or e))
        return {
            'status': 'fail',
            'error': str(cause or e),
            'exception': (cause or e).__class__.__name__,
        }
    latency = round((time.time() - started) * 1000, 2)
    if not ok:
        logger.warning('Database health check returned unexpected row', alias=alias)
        return {'status': 'fail', 'error': 'unexpected response', 'latency_ms': latency}
    logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: the catalog database answers queries."""
    checks = {'database': _db_check()}
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    payload = {
        'status': overall_status,
        'checks': checks,
    }
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse(payload, status=http_status)
