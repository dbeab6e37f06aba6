"""Tyk gateway extension builder for OpenAPI documents."""

from .exceptions import (
    EmptySecurityObjectError,
    EmptyServersObjectError,
    InvalidServerURLError,
    InvalidUpstreamURLError,
    InvalidExtensionError,
    ReferenceResolutionError,
    TykExtensionError,
)
from .models import (
    Allowance,
    Authentication,
    AuthSource,
    AuthSourceKind,
    AuthSources,
    Info,
    ListenPath,
    Middleware,
    Operation,
    Server,
    State,
    Token,
    TykExtensionConfigParams,
    Upstream,
    ValidateRequest,
    XTykAPIGateway,
)
from .oas import OAS
from .operations import operation_id
from .params import get_extension_overrides, get_extension_overrides_from_url
from .security import import_authentication, import_security_scheme

__version__ = "0.1.0"
__all__ = [
    "OAS",
    "XTykAPIGateway",
    "Info",
    "State",
    "Upstream",
    "Server",
    "ListenPath",
    "Authentication",
    "Token",
    "AuthSources",
    "AuthSource",
    "AuthSourceKind",
    "Middleware",
    "Operation",
    "Allowance",
    "ValidateRequest",
    "TykExtensionConfigParams",
    "get_extension_overrides",
    "get_extension_overrides_from_url",
    "import_authentication",
    "import_security_scheme",
    "operation_id",
    "TykExtensionError",
    "InvalidUpstreamURLError",
    "InvalidServerURLError",
    "EmptyServersObjectError",
    "EmptySecurityObjectError",
    "ReferenceResolutionError",
    "InvalidExtensionError",
]
