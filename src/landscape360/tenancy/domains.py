"""Host name classification for tenant routing.

Maps the host a request was addressed to onto a tenant key:

    acme.delxn.club          -> "acme"        (tenant subdomain)
    ramirez-gardening:3000   -> "ramirez-gardening"  (dev machine name)
    greenthumb.com           -> "greenthumb.com"     (apex custom domain)
    delxn.club, localhost    -> None          (platform / super-admin)

Everything here is pure and never raises on bad input.
"""

import re
from collections.abc import Iterable

from landscape360.config.settings import LOCAL_HOSTS, Settings, get_settings
from landscape360.db.schemas.tenant import TenantSnapshot

_EXPLICIT_PORT = re.compile(r":([3-9]\d{2,5})$")
_BARE_HOST = re.compile(r"^[a-z0-9-]+(?::\d+)?$")
_PORT_SUFFIX = re.compile(r":(\d+)$")


def strip_port(host: str) -> str:
    """Drop a ``:port`` suffix and normalize case and whitespace."""
    return host.split(":", 1)[0].strip().lower()


def _reserved_hosts(platform_hosts: Iterable[str] | None) -> frozenset[str]:
    if platform_hosts is None:
        return get_settings().reserved_hosts
    return LOCAL_HOSTS | frozenset(h.strip().lower() for h in platform_hosts)


def is_platform_host(host: str | None, platform_hosts: Iterable[str] | None = None) -> bool:
    """Whether ``host`` belongs to the platform rather than a tenant.

    A missing host counts as the platform.
    """
    if not host or not isinstance(host, str):
        return True
    return strip_port(host) in _reserved_hosts(platform_hosts)


def extract_tenant_key(
    host: str | None,
    platform_hosts: Iterable[str] | None = None,
) -> str | None:
    """Map a host header value to a candidate tenant key.

    Args:
        host: Raw ``Host`` (or ``X-Tenant-Domain``) header value
        platform_hosts: Reserved platform hostnames; ``localhost`` and
            ``127.0.0.1`` are always reserved. Defaults to the configured
            ``PLATFORM_HOSTS``.

    Returns:
        The tenant key, or None for platform hosts and unusable input
    """
    if not host or not isinstance(host, str):
        return None

    domain = strip_port(host)
    if not domain or domain in _reserved_hosts(platform_hosts):
        return None

    # Machine-name hosts used in local development
    if "-" in domain and "." not in domain:
        return domain

    labels = domain.split(".")
    if len(labels) >= 3 and labels[0] != "www":
        return labels[0]

    # Apex custom domain, stored as the tenant's subdomain key.
    # www.<apex> also lands here and keeps its "www." prefix.
    return domain


def is_local_dev_host(host: str | None) -> bool:
    """Whether ``host`` looks like a local development origin (served over http)."""
    if not host:
        return False
    h = host.lower()
    return (
        "localhost" in h
        or "127.0.0.1" in h
        or bool(_EXPLICIT_PORT.search(h))
        or bool(_BARE_HOST.match(h))
    )


def _normalize_domain(value: str) -> str:
    return re.sub(r"^https?://", "", str(value), flags=re.IGNORECASE).rstrip("/")


def _extract_host(value: str | None) -> str | None:
    if not value:
        return None
    text = str(value)
    if "://" in text:
        text = text.split("://", 1)[1]
    host = text.split("/", 1)[0].strip().lower()
    return host or None


def build_tenant_frontend_url(
    tenant: TenantSnapshot | str | None,
    path: str = "",
    prefer_host: str | None = None,
    settings: Settings | None = None,
) -> str:
    """Build the public frontend URL for a tenant.

    Used for links in emails and redirects. The tenant's own domains win;
    otherwise the request's origin is reused when it is a public custom
    domain, and finally the tenant subdomain under ``BASE_DOMAIN``.

    Args:
        tenant: Tenant snapshot, a bare subdomain, or None for the platform
        path: Path appended to the URL (e.g. ``/appointments/42``)
        prefer_host: Origin or host of the current request, if known
        settings: Settings override

    Returns:
        Absolute URL such as ``https://acme.delxn.club/appointments/42``
    """
    settings = settings or get_settings()
    main_domain = settings.BASE_DOMAIN
    preferred = _extract_host(prefer_host)

    if settings.FRONTEND_PROTOCOL:
        protocol = settings.FRONTEND_PROTOCOL
    elif is_local_dev_host(preferred) or main_domain.startswith("localhost"):
        protocol = "http"
    else:
        protocol = "https"

    def subdomain_host(subdomain: str) -> str:
        if is_local_dev_host(preferred):
            match = _PORT_SUFFIX.search(preferred or "")
            port = match.group(1) if match else str(settings.FRONTEND_PORT)
            return f"{subdomain}:{port}"
        return f"{subdomain}.{main_domain}"

    admin_hosts = [*settings.PLATFORM_HOSTS, *settings.FRONTEND_ADMIN_HOSTS]
    public_origin = preferred and not is_platform_host(preferred, admin_hosts)

    if isinstance(tenant, TenantSnapshot):
        if tenant.custom_domains:
            full_domain = _normalize_domain(tenant.custom_domains[0])
        elif tenant.domain:
            full_domain = _normalize_domain(tenant.domain)
        elif public_origin:
            full_domain = _normalize_domain(preferred)
        elif tenant.subdomain:
            full_domain = subdomain_host(tenant.subdomain)
        else:
            full_domain = _normalize_domain(main_domain)
    elif public_origin:
        full_domain = _normalize_domain(preferred)
    elif tenant:
        full_domain = subdomain_host(tenant)
    else:
        full_domain = _normalize_domain(main_domain)

    return f"{protocol}://{full_domain}{path}"
