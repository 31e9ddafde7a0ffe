# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import contextlib
import logging
from typing import Callable

from fastapi import FastAPI, Request, HTTPException, status
from fastapi.exception_handlers import http_exception_handler

from common.logging.setup import configure_logging, get_log_id
from common.version import get_version
from common import config as conf

_logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _logging_lifespan(config: conf.Config):
    configure_logging(config)
    yield


@contextlib.asynccontextmanager
async def _run_lifespans(app: "ExtendedFastAPI"):
    with contextlib.ExitStack() as stack:
        for lifespan_function in app.lifespan_functions:
            stack.enter_context(lifespan_function)
        yield


class ExtendedFastAPI(FastAPI):
    """
    FastAPI app set up from the service configuration.

    `config` is the same factory the routes get their configuration injected from.
    `lifespan_functions` are entered in order at startup, after logging is configured.
    Unless given explicitly, `title` is the app name and `version` the build version.
    """

    def __init__(
        self,
        config: Callable[[], conf.Config],
        lifespan_functions: list[contextlib.AbstractContextManager] = None,
        **kwargs,
    ) -> None:
        self.config_instance = config()
        self.lifespan_functions = [_logging_lifespan(self.config_instance), *(lifespan_functions or [])]

        kwargs.setdefault("title", self.config_instance.app_name)
        kwargs.setdefault("version", get_version())
        kwargs.setdefault("lifespan", _run_lifespans)
        if not self.config_instance.enable_documentation_endpoints:
            _logger.info("Documentation endpoints disabled.")
            kwargs.update(docs_url=None, redoc_url=None, openapi_url=None)

        super().__init__(**kwargs)
        self.add_exception_handler(Exception, self.unhandled_exception_handler)

    async def unhandled_exception_handler(self, request: Request, exc: Exception):
        """Answers with an opaque 500, the details only go to the log"""
        if isinstance(exc, HTTPException):
            return await http_exception_handler(request, exc)

        log_id = get_log_id()
        _logger.error(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}.", exc_info=exc)
        opaque = HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Could not process the request. Please contact support with request id {log_id}",
        )
        return await http_exception_handler(request, opaque)
