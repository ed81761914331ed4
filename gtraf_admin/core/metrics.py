"""Prometheus metrics: HTTP traffic, upstream API calls, price cache and audit trail"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

upstream_requests = Counter(
    'upstream_requests_total',
    'Total calls to the G-TRAF+ REST API',
    ['method', 'resource', 'status'],
    registry=registry
)

upstream_duration = Histogram(
    'upstream_request_duration_seconds',
    'G-TRAF+ REST API call duration in seconds',
    ['resource'],
    registry=registry
)

cache_hits = Counter(
    'cache_hits_total',
    'Cache hits per cache',
    ['cache'],
    registry=registry
)

cache_misses = Counter(
    'cache_misses_total',
    'Cache misses per cache',
    ['cache'],
    registry=registry
)

rate_limit_exceeded = Counter(
    'rate_limit_exceeded_total',
    'Dashboard mutations refused by the per-user rate limit',
    ['user_id'],
    registry=registry
)

estimates_computed = Counter(
    'price_estimates_total',
    'Reservation price estimates computed (cached answers excluded)',
    ['vehicle_type'],
    registry=registry
)

exports_generated = Counter(
    'exports_total',
    'Dashboard data exports served',
    ['section', 'format'],
    registry=registry
)

audit_logs_created = Counter(
    'audit_logs_created_total',
    'Audit trail entries written',
    ['action'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)

db_connected = Gauge(
    'db_connected',
    'Database connection status (1=connected, 0=disconnected)',
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
