class TykExtensionError(Exception):
    """Base exception for errors raised while building the Tyk extension."""
    pass

class InvalidUpstreamURLError(TykExtensionError):
    """Raised when the supplied upstream URL override is not an absolute URL."""
    pass

class InvalidServerURLError(TykExtensionError):
    """Raised when the first server URL of the document is not an absolute URL."""
    pass

class EmptyServersObjectError(TykExtensionError):
    """Raised when no upstream URL is supplied and the document declares no servers."""
    pass

class EmptySecurityObjectError(TykExtensionError):
    """Raised when authentication is imported from a document without security requirements."""
    pass

class ReferenceResolutionError(TykExtensionError):
    """Raised when a local $ref cannot be resolved inside the document."""
    pass

class InvalidExtensionError(TykExtensionError):
    """Raised when the extension embedded in the document does not match the models."""
    pass
