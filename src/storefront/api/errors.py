"""Translate ordering errors into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.errors import (
    CouponIneligible,
    CouponNotFound,
    InvalidRequest,
    OrderingError,
    PersistenceFailure,
    ProductNotFound,
    StoreNotFound,
    Unauthenticated,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    Unauthenticated.code: 401,
    InvalidRequest.code: 405,
    CouponNotFound.code: 404,
    CouponIneligible.code: 400,
    ProductNotFound.code: 400,
    StoreNotFound.code: 400,
    PersistenceFailure.code: 400,
}

# 401 and 405 bodies use "message", every other error uses "error"
_MESSAGE_CODES = {Unauthenticated.code, InvalidRequest.code}


def error_response(exc: OrderingError) -> JSONResponse:
    status_code = _STATUS_CODES.get(exc.code, 400)
    key = "message" if exc.code in _MESSAGE_CODES else "error"
    return JSONResponse(status_code=status_code, content={key: exc.message})


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    logger.info(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        code=exc.code,
    )
    return error_response(exc)


def register_ordering_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
