"""Translation of use case errors into HTTP responses"""

import logging
from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app import errors

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    errors.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    errors.INSUFFICIENT_BALANCE: status.HTTP_402_PAYMENT_REQUIRED,
    errors.NOT_A_SELLER: status.HTTP_403_FORBIDDEN,
    errors.INVALID_STATUS_TRANSITION: status.HTTP_409_CONFLICT,
    errors.ALREADY_RATED: status.HTTP_409_CONFLICT,
    errors.ORDER_NOT_COMPLETED: status.HTTP_409_CONFLICT,
    errors.SELLER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    errors.GATEWAY_UNAVAILABLE: status.HTTP_502_BAD_GATEWAY,
    errors.GATEWAY_REJECTED: status.HTTP_502_BAD_GATEWAY,
}


def status_for(error: Error) -> int:
    if error.code in errors.NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    return STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)


class ClientError(Exception):
    """
    Raised by routes for a failed use case Result

    The status code defaults to the mapping for the error code.
    """

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} {exc.error.reason}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.to_dict()},
    )
