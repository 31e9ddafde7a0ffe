# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
import sys

from asgi_correlation_id import CorrelationIdFilter, correlation_id

from common.config import Config
from common.logging import splunk

_correlation_id_length = 16

_quiet_loggers = ("httpx", "httpcore")
"""Log every outgoing request on INFO, callback urls included"""


def get_log_id() -> str:
    """Correlation id of the current request, shortened as written to the log."""
    return (correlation_id.get() or "-")[:_correlation_id_length]


def create_console_handler(config: Config) -> logging.Handler:
    """stdout handler adding the correlation id to each record, JSON lines if splunk logging is enabled"""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(CorrelationIdFilter(uuid_length=_correlation_id_length))
    if config.enable_splunk_log:
        handler.setFormatter(splunk.SplunkFormatter(defaults={"app_name": config.app_name}))
    return handler


def configure_logging(config: Config) -> None:
    """Sends the records of all loggers known at startup (uvicorn included) to a single console handler."""
    handler = create_console_handler(config)
    logging.basicConfig(handlers=[handler], level=config.log_level)

    existing_loggers = [logger for logger in logging.root.manager.loggerDict.values() if isinstance(logger, logging.Logger)]
    for logger in existing_loggers:
        logger.handlers = [handler]
        logger.propagate = False

    for name in _quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
