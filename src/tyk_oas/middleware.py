"""
Per-operation middleware derived from the OpenAPI document.
"""

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from .models import (
    CONTENT_TYPE_JSON,
    Allowance,
    Middleware,
    Operation,
    ValidateRequest,
    XTykAPIGateway,
)
from .operations import operation_keys

if TYPE_CHECKING:
    from .oas import OAS

logger = logging.getLogger(__name__)

OperationKeys = Dict[Tuple[str, str], str]


def _get_operation(extension: XTykAPIGateway, key: str) -> Operation:
    """Return the middleware entry for key, creating the middleware lazily."""
    if extension.middleware is None:
        extension.middleware = Middleware()

    operation = extension.middleware.operations.get(key)
    if operation is None:
        operation = Operation()
        extension.middleware.operations[key] = operation

    return operation


def has_json_request_body(oas: "OAS", operation: Dict[str, Any]) -> bool:
    """Check whether an operation declares an application/json request body."""
    request_body = oas.resolve(operation.get("requestBody"))
    if not isinstance(request_body, dict):
        return False

    for media_type in request_body.get("content") or {}:
        if media_type.split(";", 1)[0].strip().lower() == CONTENT_TYPE_JSON:
            return True

    return False


def import_allow_list(
    oas: "OAS",
    extension: XTykAPIGateway,
    enable: bool,
    keys: Optional[OperationKeys] = None,
) -> None:
    """Set the allow list of every operation in the document.

    Enabling the allow list switches off an existing block list entry of the
    same operation. Disabling it leaves the block list as it is.
    """
    if keys is None:
        keys = operation_keys(oas)

    for path, method, _ in oas.operations():
        key = keys[(path, method)]
        operation = _get_operation(extension, key)

        if operation.allow is None:
            operation.allow = Allowance()
        operation.allow.enabled = enable

        if enable and operation.block is not None and operation.block.enabled:
            logger.debug("Disabling block list of %s in favour of allow list", key)
            operation.block.enabled = False

    logger.debug("Allow list set to %s", enable)


def import_validate_request(
    oas: "OAS",
    extension: XTykAPIGateway,
    enable: bool,
    keys: Optional[OperationKeys] = None,
) -> None:
    """Set request validation for operations with a JSON request body.

    Operations without an application/json request body are not configured.
    """
    if keys is None:
        keys = operation_keys(oas)

    for path, method, operation_doc in oas.operations():
        if not has_json_request_body(oas, operation_doc):
            continue

        key = keys[(path, method)]
        operation = _get_operation(extension, key)

        if operation.validate_request is None:
            operation.validate_request = ValidateRequest()
        operation.validate_request.enabled = enable
        operation.validate_request.error_response_code = HTTPStatus.BAD_REQUEST.value
        logger.debug("Request validation of %s set to %s", key, enable)
