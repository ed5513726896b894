import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from shared.helpers.json_response_helper import failure_payload
from shared.utils.app_status_code import AppStatusCode
from .errors import (
    CategoryNotFound, ClassificationError, InvalidIdentifier, MalformedCode,
    ReferenceCodeError, SequenceExhausted)

logger = logging.getLogger(__name__)


def classification_error_status(exc: ClassificationError):
    if isinstance(exc, InvalidIdentifier):
        return 422, AppStatusCode.INVALID_INPUT
    if isinstance(exc, CategoryNotFound):
        return 404, AppStatusCode.NOT_FOUND
    return 400, AppStatusCode.VALIDATION_ERROR


def reference_error_status(exc: ReferenceCodeError):
    if isinstance(exc, SequenceExhausted):
        return 409, AppStatusCode.SEQUENCE_EXHAUSTED
    if isinstance(exc, MalformedCode):
        return 422, AppStatusCode.INVALID_INPUT
    return 400, AppStatusCode.OPERATION_FAILED


def setup_domain_exception_handlers(app: FastAPI):

    @app.exception_handler(ClassificationError)
    async def classification_exception_handler(request: Request, exc: ClassificationError):
        http_status, status_code = classification_error_status(exc)
        wrapped = failure_payload(exc.message, status_code)
        wrapped["data"] = {"error": exc.code.value}
        return JSONResponse(content=wrapped, status_code=http_status)

    @app.exception_handler(ReferenceCodeError)
    async def reference_exception_handler(request: Request, exc: ReferenceCodeError):
        http_status, status_code = reference_error_status(exc)
        if isinstance(exc, SequenceExhausted):
            # needs someone to widen or re-scope the numbering
            logger.error("Reference sequence exhausted: %s", exc.message)
        wrapped = failure_payload(exc.message, status_code)
        wrapped["data"] = {"error": exc.code.value}
        return JSONResponse(content=wrapped, status_code=http_status)
