"""
Extraction of extension overrides from request parameters.
"""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs, urlsplit

from .models import TykExtensionConfigParams

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "t", "T", "TRUE", "true", "True")
_FALSE_VALUES = ("0", "f", "F", "FALSE", "false", "False")

# request parameter -> TykExtensionConfigParams field
STRING_PARAMS = {
    "listenPath": "listen_path",
    "upstreamURL": "upstream_url",
    "customDomain": "custom_domain",
}
BOOL_PARAMS = {
    "validateRequest": "validate_request",
    "allowList": "allow_list",
}


def parse_bool(value: str) -> Optional[bool]:
    """Parse a boolean parameter, returning None when it is not a boolean."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def _get_value(source: Mapping[str, Any], key: str) -> str:
    value = source.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return ""
    return str(value).strip()


def get_extension_overrides(
    source: Mapping[str, Any]
) -> Optional[TykExtensionConfigParams]:
    """Build the overrides from request parameters.

    Args:
        source: Request parameters, e.g. a query string mapping. List values
            (as returned by parse_qs) contribute their first element.

    Returns:
        The overrides, or None when no override parameter was supplied
    """
    values = {}

    for param, field in STRING_PARAMS.items():
        value = _get_value(source, param)
        if value:
            values[field] = value

    for param, field in BOOL_PARAMS.items():
        raw = _get_value(source, param)
        if not raw:
            continue
        value = parse_bool(raw)
        if value is None:
            logger.warning("Ignoring %s=%r, expected a boolean", param, raw)
            continue
        values[field] = value

    if not values:
        return None

    return TykExtensionConfigParams(**values)


def get_extension_overrides_from_url(url: str) -> Optional[TykExtensionConfigParams]:
    """Build the overrides from the query string of a URL.

    Args:
        url: Request URL, or a bare query string

    Returns:
        The overrides, or None when no override parameter was supplied
    """
    query = urlsplit(url).query if "?" in url else url.lstrip("?")
    return get_extension_overrides(parse_qs(query))
