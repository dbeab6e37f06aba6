"""
Data models for the Tyk gateway extension of an OpenAPI document.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EXTENSION_KEY = "x-tyk-api-gateway"
CONTENT_TYPE_JSON = "application/json"
SCHEME_BEARER = "bearer"
BEARER_FORMAT_JWT = "JWT"


class AuthSourceKind(str, Enum):
    """Locations a credential can be read from."""

    HEADER = "header"
    QUERY = "query"
    COOKIE = "cookie"


class SecuritySchemeType(str, Enum):
    """OpenAPI security scheme types the importer understands."""

    API_KEY = "apiKey"
    HTTP = "http"


class TykModel(BaseModel):
    """Base for extension models.

    Fields are read and written with camelCase aliases. Unknown keys are kept
    so hand-edited settings survive a load and dump.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class State(TykModel):
    active: bool = False


class Info(TykModel):
    name: str = ""
    state: State = Field(default_factory=State)


class Upstream(TykModel):
    url: str = ""


class ListenPath(TykModel):
    value: str = ""
    strip: Optional[bool] = None


class AuthSource(TykModel):
    """A single credential location."""

    enabled: bool = False
    name: Optional[str] = None


class AuthSources(TykModel):
    """Credential locations of a security scheme."""

    header: Optional[AuthSource] = None
    query: Optional[AuthSource] = None
    cookie: Optional[AuthSource] = None

    def import_source(self, kind: Union[AuthSourceKind, str]) -> None:
        """Enable the given location, leaving the other locations untouched.

        Args:
            kind: Location to enable (header, query or cookie)
        """
        kind = AuthSourceKind(kind)
        setattr(self, kind.value, AuthSource(enabled=True))


class Token(AuthSources):
    """Token authentication settings for one security scheme."""

    enabled: bool = False


class Authentication(TykModel):
    enabled: bool = False
    security_schemes: Dict[str, Token] = Field(default_factory=dict)


class Server(TykModel):
    listen_path: ListenPath = Field(default_factory=ListenPath)
    custom_domain: Optional[str] = None
    authentication: Optional[Authentication] = None


class Allowance(TykModel):
    enabled: bool = False


class ValidateRequest(TykModel):
    enabled: bool = False
    error_response_code: Optional[int] = None


class Operation(TykModel):
    """Middleware settings of a single API operation."""

    allow: Optional[Allowance] = None
    block: Optional[Allowance] = None
    validate_request: Optional[ValidateRequest] = None


class Middleware(TykModel):
    operations: Dict[str, Operation] = Field(default_factory=dict)


class XTykAPIGateway(TykModel):
    """The x-tyk-api-gateway extension object."""

    info: Info = Field(default_factory=Info)
    upstream: Upstream = Field(default_factory=Upstream)
    server: Server = Field(default_factory=Server)
    middleware: Optional[Middleware] = None

    def to_dict(self) -> Dict[str, Any]:
        """Dump the extension the way it is stored in the document."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TykExtensionConfigParams(BaseModel):
    """Caller supplied overrides.

    Empty strings and None mean "not supplied".
    """

    listen_path: str = ""
    upstream_url: str = ""
    custom_domain: str = ""
    authentication: Optional[bool] = None
    allow_list: Optional[bool] = None
    validate_request: Optional[bool] = None
