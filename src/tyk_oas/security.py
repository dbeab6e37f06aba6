"""
Import of OpenAPI security schemes into the Tyk authentication settings.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from .exceptions import EmptySecurityObjectError
from .models import (
    BEARER_FORMAT_JWT,
    SCHEME_BEARER,
    Authentication,
    AuthSourceKind,
    SecuritySchemeType,
    Token,
    XTykAPIGateway,
)

if TYPE_CHECKING:
    from .oas import OAS

logger = logging.getLogger(__name__)


def auth_source_kind(native_scheme: Dict[str, Any]) -> Optional[AuthSourceKind]:
    """Work out where a security scheme carries its credential.

    Args:
        native_scheme: OpenAPI security scheme object

    Returns:
        The credential location, or None for unsupported schemes
    """
    scheme_type = native_scheme.get("type")

    if scheme_type == SecuritySchemeType.API_KEY.value:
        try:
            return AuthSourceKind(native_scheme.get("in"))
        except ValueError:
            return None

    if scheme_type == SecuritySchemeType.HTTP.value:
        scheme = str(native_scheme.get("scheme", "")).lower()
        bearer_format = str(native_scheme.get("bearerFormat", "")).upper()
        if scheme == SCHEME_BEARER and bearer_format == BEARER_FORMAT_JWT:
            # Bearer tokens travel in the Authorization header
            return AuthSourceKind.HEADER

    return None


def import_security_scheme(
    security_schemes: Dict[str, Token],
    name: str,
    native_scheme: Dict[str, Any],
    enable: bool,
) -> None:
    """Merge one OpenAPI security scheme into the Tyk security schemes.

    Only the credential location found in the scheme is added or replaced;
    locations already configured on an existing token are kept.

    Args:
        security_schemes: Tyk security schemes keyed by scheme name, updated in place
        name: Scheme name as declared in the document
        native_scheme: OpenAPI security scheme object
        enable: Value for the token's enabled flag
    """
    kind = auth_source_kind(native_scheme)
    if kind is None:
        logger.debug(
            "Ignoring unsupported security scheme %s (type %r)",
            name,
            native_scheme.get("type"),
        )
        return

    token = security_schemes.get(name)
    if token is None:
        token = Token()
        security_schemes[name] = token

    token.enabled = enable
    token.import_source(kind)
    logger.debug("Imported %s auth source for security scheme %s", kind.value, name)


def import_authentication(oas: "OAS", extension: XTykAPIGateway, enable: bool) -> None:
    """Import the document's security requirements into the extension.

    Args:
        oas: The document being configured
        extension: Extension to update in place
        enable: Value for the authentication and token enabled flags

    Raises:
        EmptySecurityObjectError: If the document declares no security requirements
    """
    security = oas.security
    if not security:
        raise EmptySecurityObjectError(
            "The document declares no security requirements"
        )

    authentication = extension.server.authentication
    if authentication is None:
        authentication = Authentication()
        extension.server.authentication = authentication

    for requirement in security:
        for name in requirement:
            native_scheme = oas.get_security_scheme(name)
            if not native_scheme:
                logger.debug("Security scheme %s is not defined, skipping", name)
                continue
            import_security_scheme(
                authentication.security_schemes, name, native_scheme, enable
            )

    authentication.enabled = enable
