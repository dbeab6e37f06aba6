"""
OpenAPI document wrapper and the default Tyk extension builder.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from . import refs
from .exceptions import InvalidExtensionError
from .middleware import import_allow_list, import_validate_request
from .models import EXTENSION_KEY, TykExtensionConfigParams, XTykAPIGateway
from .operations import operation_keys
from .security import import_authentication
from .servers import resolve_server

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class OAS:
    """An OpenAPI 3 document together with its Tyk extension."""

    def __init__(self, spec: Dict[str, Any]):
        """Initialize with a parsed OpenAPI document.

        Args:
            spec: Dictionary containing the OpenAPI specification. The
                extension is stored in it under "x-tyk-api-gateway".
        """
        self.spec = spec

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "OAS":
        """Create a document from a YAML or JSON file.

        Args:
            path: Path to the OpenAPI file

        Returns:
            An instance of OAS
        """
        with open(path, "r") as f:
            spec = yaml.safe_load(f)
        return cls(spec or {})

    @property
    def title(self) -> str:
        return (self.spec.get("info") or {}).get("title") or ""

    @property
    def servers(self) -> List[str]:
        """URLs of the servers declared by the document, in order."""
        return [server.get("url", "") for server in self.spec.get("servers") or []]

    @property
    def security(self) -> List[Dict[str, List[str]]]:
        return self.spec.get("security") or []

    def get_security_scheme(self, name: str) -> Optional[Dict[str, Any]]:
        """Return the named security scheme with references resolved.

        Only the requested scheme is resolved, so a broken reference in an
        unused scheme does not get in the way.
        """
        schemes = (self.spec.get("components") or {}).get("securitySchemes") or {}
        scheme = schemes.get(name)
        if scheme is None:
            return None
        return self.resolve(scheme)

    def resolve(self, obj: Any) -> Any:
        """Resolve a local $ref against this document."""
        return refs.resolve(self.spec, obj)

    def operations(self) -> Iterator[Tuple[str, str, Dict[str, Any]]]:
        """Iterate over the operations of the document.

        Yields:
            Tuples of (path, upper-cased HTTP method, operation object)
        """
        for path, path_item in (self.spec.get("paths") or {}).items():
            path_item = self.resolve(path_item)
            if not isinstance(path_item, dict):
                continue
            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if isinstance(operation, dict):
                    yield path, method.upper(), operation

    def _load_tyk_extension(self) -> Optional[XTykAPIGateway]:
        """Read the stored extension without changing the document.

        Raises:
            InvalidExtensionError: If stored data does not match the models
        """
        extension = self.spec.get(EXTENSION_KEY)
        if extension is None or isinstance(extension, XTykAPIGateway):
            return extension

        try:
            return XTykAPIGateway.model_validate(extension)
        except ValidationError as e:
            raise InvalidExtensionError(f"Invalid {EXTENSION_KEY} extension: {e}")

    def get_tyk_extension(self) -> Optional[XTykAPIGateway]:
        """Return the extension attached to the document, if any.

        Raises:
            InvalidExtensionError: If stored data does not match the models
        """
        extension = self._load_tyk_extension()
        if extension is not None:
            self.spec[EXTENSION_KEY] = extension
        return extension

    def set_tyk_extension(self, extension: Optional[XTykAPIGateway]) -> None:
        """Attach an extension to the document, replacing any existing one."""
        if extension is None:
            self.spec.pop(EXTENSION_KEY, None)
        else:
            self.spec[EXTENSION_KEY] = extension

    def build_default_tyk_extension(
        self, overrides: Optional[TykExtensionConfigParams] = None
    ) -> None:
        """Create or refresh the Tyk extension of the document.

        Values already present in the extension are kept unless the matching
        override is supplied. The document is only updated when every step
        succeeds.

        Args:
            overrides: Caller supplied overrides

        Raises:
            TykExtensionError: If the upstream URL cannot be resolved or
                authentication is requested for a document without security
        """
        if overrides is None:
            overrides = TykExtensionConfigParams()

        stored = self.spec.get(EXTENSION_KEY)
        existing = self._load_tyk_extension()
        if existing is None:
            logger.debug("No existing extension, building a new one")
            extension = XTykAPIGateway()
        else:
            extension = existing.model_copy(deep=True)

        listen_path, upstream_url = resolve_server(self, overrides, existing)

        if listen_path is not None:
            extension.server.listen_path.value = listen_path
        if overrides.custom_domain:
            extension.server.custom_domain = overrides.custom_domain
        if upstream_url is not None:
            extension.upstream.url = upstream_url

        if not extension.info.name:
            extension.info.name = self.title
        extension.info.state.active = True

        if overrides.authentication is not None:
            import_authentication(self, extension, overrides.authentication)

        if overrides.allow_list is not None or overrides.validate_request is not None:
            keys = operation_keys(self)
            if overrides.allow_list is not None:
                import_allow_list(self, extension, overrides.allow_list, keys)
            if overrides.validate_request is not None:
                import_validate_request(
                    self, extension, overrides.validate_request, keys
                )

        if not isinstance(stored, XTykAPIGateway):
            self.set_tyk_extension(extension)
        else:
            for field in XTykAPIGateway.model_fields:
                setattr(existing, field, getattr(extension, field))
            extension = existing

        logger.info(
            "Built Tyk extension for %r (listen path %s, upstream %s)",
            extension.info.name,
            extension.server.listen_path.value,
            extension.upstream.url,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the document with the extension dumped to plain data."""
        extension = self.spec.get(EXTENSION_KEY)
        result = {k: v for k, v in self.spec.items() if k != EXTENSION_KEY}
        result = copy.deepcopy(result)

        if isinstance(extension, XTykAPIGateway):
            result[EXTENSION_KEY] = extension.to_dict()
        elif extension is not None:
            # Never validated, so written back as it was read
            result[EXTENSION_KEY] = copy.deepcopy(extension)

        return result

    def save_yaml(self, output_path: Union[str, Path]) -> None:
        """Save the document to a YAML file.

        Args:
            output_path: Path where to save the YAML file
        """
        with open(output_path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
