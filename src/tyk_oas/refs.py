"""
Local reference resolution for OpenAPI documents.

Only references into the same document (e.g. "#/components/requestBodies/Pet")
are followed. External files and URLs are never loaded.
"""

from typing import Any, Dict, Optional, Set

from .exceptions import ReferenceResolutionError


def _unescape(token: str) -> str:
    # "~1" must be decoded before "~0" so "~01" stays "~1"
    return token.replace("~1", "/").replace("~0", "~")


def resolve_json_pointer(document: Any, pointer: str) -> Any:
    """Walk a document along the fragment part of a local $ref.

    An empty pointer names the whole document. Array members are addressed
    by their decimal index.

    Raises:
        ReferenceResolutionError: If a step leads nowhere
    """
    if pointer == "":
        return document
    if pointer[0] != "/":
        raise ReferenceResolutionError(f"Malformed reference pointer {pointer!r}")

    node = document
    for token in map(_unescape, pointer[1:].split("/")):
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            raise ReferenceResolutionError(
                f"Reference pointer {pointer!r} has no target at {token!r}"
            )
    return node


def resolve(spec: Dict[str, Any], obj: Any, _seen: Optional[Set[str]] = None) -> Any:
    """Follow $ref chains of an object until a concrete value is reached.

    Args:
        spec: The document the references point into
        obj: The object that may be a {"$ref": ...} mapping

    Returns:
        The referenced value, or obj itself when it is not a reference

    Raises:
        ReferenceResolutionError: If a reference is external, dangling or circular
    """
    if not isinstance(obj, dict) or "$ref" not in obj:
        return obj

    ref = obj["$ref"]
    seen = _seen if _seen is not None else set()
    if ref in seen:
        raise ReferenceResolutionError(f"Circular reference: {ref}")
    seen.add(ref)

    if not isinstance(ref, str) or not ref.startswith("#"):
        raise ReferenceResolutionError(f"Only local references are supported: {ref}")

    return resolve(spec, resolve_json_pointer(spec, ref[1:]), seen)
