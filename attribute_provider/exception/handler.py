# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging

from fastapi import Request, FastAPI
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from common.logging.setup import get_log_id

from .disclosure_errors import DisclosureError, InternalDisclosureError, InvalidRequestError

_logger = logging.getLogger(__name__)


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers on the FastAPI app instance.
    Changed 422 Unprocessable Entity to 400 Bad Request

    Args:
        app (FastAPI): the instance to configure the handlers for.
    """

    @app.exception_handler(DisclosureError)
    async def disclosure_exception_handler(request: Request, exc: DisclosureError):
        if isinstance(exc, InternalDisclosureError):
            # The cause may contain secrets, it is never part of the response
            _logger.error(f"{type(exc).__name__} while handling {request.url.path}", exc_info=exc.__cause__)
            exc.additional_error_description = f"Please contact support with request id {get_log_id()}"
        else:
            _logger.info(f"Disclosure Exception {exc.status_code=} {exc.error=} {exc.additional_error_description}")

        return JSONResponse(
            status_code=exc.status_code,
            headers=exc.headers,
            content=exc.as_response().model_dump(exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request_exception_handler(request: Request, exc: RequestValidationError):
        """
        Recasts Validation Errors to disclosure exceptions
        """
        wrapper_exception = InvalidRequestError(additional_error_description=f"Details: {exc.errors()}")
        return await disclosure_exception_handler(request, wrapper_exception)
