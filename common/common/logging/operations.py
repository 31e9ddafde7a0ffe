# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Log entries describing the progress of a business operation.

A service subclasses `OperationsLogEntry` and declares its own `Operation` & `Step` enums.
The placeholders below are never logged by a service.
"""

from enum import Enum

from common.logging import splunk


class OperationsLogEntry(splunk.SplunkExtendedLogEntry):
    class Status(Enum):
        success = "SUCCESS"
        error = "ERROR"

    class Operation(Enum):
        placeholder = "PLACEHOLDER"

    class Step(Enum):
        placeholder = "PLACEHOLDER"

    status: Status
    operation: Operation
    step: Step
    error_code: str | None = None
    """Short, stable name of the failure. Only set together with `Status.error`"""
