# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Splunk compatible log output.

Every record is rendered as a single line JSON object. Records whose message is a
`SplunkExtendedLogEntry` additionally carry the entry fields as top level keys.
"""

import json
import logging
import datetime
from enum import Enum

from pydantic import BaseModel


class SplunkExtendedLogEntry(BaseModel):
    """Log message carrying additional, machine readable fields."""

    message: str

    def extended_fields(self) -> dict[str, object]:
        """All fields except the message which are set, enums rendered by value"""
        fields = {}
        for name, value in iter(self):
            if name == "message" or value is None:
                continue
            fields[name] = value.value if isinstance(value, Enum) else value
        return fields

    def __str__(self) -> str:
        details = " ".join(f"{name}={value}" for name, value in self.extended_fields().items())
        return f"{self.message} {details}" if details else self.message


class SplunkFormatter(logging.Formatter):
    """
    Formats log records as JSON with the keys
    `@timestamp`, `level`, `app`, `hash` (correlation id), `logger` & `message`.

    `defaults` provides values for `app_name` and `correlation_id`
    if the record does not carry them (e.g. outside of a request).
    """

    def __init__(self, defaults: dict[str, str] | None = None) -> None:
        super().__init__()
        self._defaults = defaults or {}

    def _get(self, record: logging.LogRecord, name: str) -> str | None:
        value = getattr(record, name, None)
        if value is None or value == "-":
            return self._defaults.get(name)
        return value

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.datetime.fromtimestamp(record.created).astimezone()
        entry: dict[str, object] = {
            "@timestamp": timestamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "app": self._get(record, "app_name"),
            "hash": self._get(record, "correlation_id"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if isinstance(record.msg, SplunkExtendedLogEntry):
            entry.update(record.msg.extended_fields())
        if record.exc_info:
            entry["stack_trace"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
