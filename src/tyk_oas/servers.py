"""
Listen path and upstream URL resolution.
"""

import logging
from typing import TYPE_CHECKING, Optional, Tuple
from urllib.parse import urlsplit

from .exceptions import (
    EmptyServersObjectError,
    InvalidServerURLError,
    InvalidUpstreamURLError,
)
from .models import TykExtensionConfigParams, XTykAPIGateway

if TYPE_CHECKING:
    from .oas import OAS

logger = logging.getLogger(__name__)

DEFAULT_LISTEN_PATH = "/"


def validate_url(url: str) -> bool:
    """Check that a URL is absolute, i.e. has both a scheme and a host."""
    try:
        parts = urlsplit(url)
        return bool(parts.scheme) and bool(parts.hostname)
    except ValueError:
        return False


def resolve_listen_path(
    overrides: TykExtensionConfigParams, existing: Optional[XTykAPIGateway]
) -> Optional[str]:
    """Return the listen path to apply, or None to keep the existing one."""
    if overrides.listen_path:
        return overrides.listen_path

    if existing is None or not existing.server.listen_path.value:
        return DEFAULT_LISTEN_PATH

    return None


def resolve_upstream_url(
    oas: "OAS",
    overrides: TykExtensionConfigParams,
    existing: Optional[XTykAPIGateway],
) -> Optional[str]:
    """Return the upstream URL to apply, or None to keep the existing one.

    Raises:
        InvalidUpstreamURLError: If the override is not an absolute URL
        EmptyServersObjectError: If a server URL is needed and none is declared
        InvalidServerURLError: If the first declared server URL is not absolute
    """
    if overrides.upstream_url:
        if not validate_url(overrides.upstream_url):
            raise InvalidUpstreamURLError(
                f"Invalid upstream URL: {overrides.upstream_url!r}"
            )
        return overrides.upstream_url

    if existing is not None and existing.upstream.url:
        logger.debug("Keeping existing upstream URL %s", existing.upstream.url)
        return None

    servers = oas.servers
    if not servers:
        raise EmptyServersObjectError(
            "The document declares no servers and no upstream URL was supplied"
        )

    server_url = servers[0]
    if not validate_url(server_url):
        raise InvalidServerURLError(f"Invalid server URL: {server_url!r}")

    return server_url


def resolve_server(
    oas: "OAS",
    overrides: TykExtensionConfigParams,
    existing: Optional[XTykAPIGateway],
) -> Tuple[Optional[str], Optional[str]]:
    """Resolve the listen path and upstream URL candidates for an extension.

    Args:
        oas: The document being configured
        overrides: Caller supplied overrides
        existing: The extension already attached to the document, if any

    Returns:
        Tuple of (listen path, upstream URL); None means keep the existing value
    """
    upstream_url = resolve_upstream_url(oas, overrides, existing)
    listen_path = resolve_listen_path(overrides, existing)
    return listen_path, upstream_url
