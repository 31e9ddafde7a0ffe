# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import fastapi
from fastapi import status

from attribute_provider.logging import DisclosureOperationsLogEntry

_logger = logging.getLogger(__name__)

TAG = "Session"

router = fastapi.APIRouter(prefix="/session", tags=[TAG])


@router.post(
    "/update",
    status_code=status.HTTP_204_NO_CONTENT,
    description="Receives session activity of the relying party frontend. Only logged, has no effect on any disclosure.",
)
def session_update(activity: Annotated[str, fastapi.Query(alias="type", min_length=1)]):
    _logger.info(
        DisclosureOperationsLogEntry(
            message=f"Session update received: {activity}",
            status=DisclosureOperationsLogEntry.Status.success,
            operation=DisclosureOperationsLogEntry.Operation.session,
            step=DisclosureOperationsLogEntry.Step.session_update,
        )
    )
    return fastapi.Response(status_code=status.HTTP_204_NO_CONTENT)
