"""Client address resolution and rate limits for the preference API.

The resolved address keys the rate limiter and is recorded as the origin of
preference changes, so it is always returned in normalised form: compressed,
without an IPv6 zone, and no longer than the audit log column.
"""

from functools import lru_cache
from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from payment_optout_api.config import get_settings

# Width of notification_preference_audit_logs.ip_address
MAX_ADDRESS_LENGTH = 45

DEVELOPMENT_PROXIES = ("127.0.0.1", "::1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")


def normalize_ip(value: str) -> str | None:
    """Parse an address and return its canonical text form.

    The IPv6 zone (``%eth0``) is dropped: it only has meaning on the host
    that received the packet.

    Args:
        value: Address as sent by the peer or a proxy header.

    Returns:
        Normalised address, or None if value is not an IP address.
    """
    host = value.strip().split("%", 1)[0]
    try:
        return str(ip_address(host))
    except ValueError:
        return None


@lru_cache
def _trusted_networks() -> tuple[IPv4Network | IPv6Network, ...]:
    """Trusted proxy networks from configuration.

    Single addresses become host networks. Development trusts loopback and
    private ranges when nothing is configured.
    """
    settings = get_settings()
    proxies = settings.trusted_proxies_list
    if not proxies and settings.environment == "development":
        proxies = list(DEVELOPMENT_PROXIES)
    return tuple(ip_network(proxy, strict=False) for proxy in proxies)


def _is_trusted_proxy(peer: str | None) -> bool:
    if peer is None:
        return False
    addr = ip_address(peer)
    return any(addr in network for network in _trusted_networks())


def _forwarded_client(request: Request) -> str | None:
    """Originating client named by a trusted proxy, if any."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client = normalize_ip(forwarded_for.split(",")[0])
        if client:
            return client

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return normalize_ip(real_ip)
    return None


def get_real_client_ip(request: Request) -> str:
    """Resolve the client address of a request.

    Proxy headers are honoured only when the direct peer is a trusted proxy.

    Args:
        request: The incoming request object.

    Returns:
        The normalised client address.
    """
    direct = get_remote_address(request)
    peer = normalize_ip(direct)

    if _is_trusted_proxy(peer):
        client = _forwarded_client(request)
        if client:
            return client

    return peer or direct[:MAX_ADDRESS_LENGTH]


def _per_minute(count: int) -> str:
    return f"{count}/minute"


def _storage_uri() -> str | None:
    """Shared limiter storage. Production runs several workers and needs Redis."""
    settings = get_settings()
    if settings.redis_url:
        return str(settings.redis_url)
    if settings.environment == "production":
        raise ValueError("REDIS_URL must be configured in production for rate limiting.")
    return None


_settings = get_settings()

# Reads and health checks
API_DEFAULT_LIMIT = _per_minute(_settings.rate_limit_default)
# Each effective change also writes an audit entry
PREFERENCE_WRITE_LIMIT = _per_minute(_settings.rate_limit_preference_write)

limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=[API_DEFAULT_LIMIT],
    storage_uri=_storage_uri(),
)
