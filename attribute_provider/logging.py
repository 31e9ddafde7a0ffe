# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from common.logging import operations

from attribute_provider.models import DisclosureState


class DisclosureOperationsLogEntry(operations.OperationsLogEntry):
    """Container for disclosure operations specific logging."""

    class Operation(Enum):
        disclosure = "DISCLOSURE"
        session = "SESSION"

    class Step(Enum):
        disclosure_start = "START"
        disclosure_confirmation = "CONFIRMATION"
        disclosure_delivery = "DELIVERY"
        disclosure_callback = "CALLBACK"
        session_update = "UPDATE"

    operation: Operation
    step: Step

    state: DisclosureState | None = None
    delivery_mode: str | None = None
