"""
Stable identifiers for the operations of an OpenAPI document.
"""

import logging
import re
from typing import TYPE_CHECKING, Dict, Tuple

if TYPE_CHECKING:
    from .oas import OAS

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def operation_id(path: str, method: str, declared_id: str = "") -> str:
    """Compute the middleware key of an operation.

    Args:
        path: API endpoint path (e.g. "/pets/{petId}")
        method: HTTP method
        declared_id: The operationId declared in the document, if any

    Returns:
        str: declared_id when set, otherwise e.g. "petsPetIdGET"
    """
    if declared_id:
        return declared_id

    segments = [s for s in _SEPARATORS.split(path) if s]
    name = "".join(
        segment if i == 0 else segment[0].upper() + segment[1:]
        for i, segment in enumerate(segments)
    )
    return f"{name}{method.upper()}"


def operation_keys(oas: "OAS") -> Dict[Tuple[str, str], str]:
    """Assign a unique key to every (path, method) pair of the document.

    Declared operationIds are reserved before generated keys are handed out,
    so a generated key never shadows a declared one. Colliding generated keys
    get a numeric suffix.

    Returns:
        Mapping of (path, upper-cased method) to operation key
    """
    operations = list(oas.operations())

    used = set()
    for path, method, operation in operations:
        declared = operation.get("operationId") or ""
        if not declared:
            continue
        if declared in used:
            logger.warning(
                "operationId %r is declared more than once (%s %s)",
                declared,
                method,
                path,
            )
        used.add(declared)

    keys: Dict[Tuple[str, str], str] = {}
    for path, method, operation in operations:
        declared = operation.get("operationId") or ""
        if declared:
            keys[(path, method)] = declared
            continue

        candidate = operation_id(path, method)
        key, suffix = candidate, 2
        while key in used:
            key = f"{candidate}{suffix}"
            suffix += 1
        if key != candidate:
            logger.debug("Generated key %s collides, using %s", candidate, key)
        used.add(key)
        keys[(path, method)] = key

    return keys
