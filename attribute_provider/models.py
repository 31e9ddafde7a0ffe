# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from enum import Enum

from pydantic import BaseModel


class StartAuthRequest(BaseModel):
    """Request of a relying party to disclose attributes of the current user"""

    attributes: list[str]
    """Names of the requested attributes, all have to be part of the attribute catalog"""
    continuation: str
    """Where the browser of the user returns to after the disclosure"""
    attr_url: str | None = None
    """If set, the result is delivered out of band by POST to this url"""


class StartAuthResponse(BaseModel):
    client_url: str
    """Where the relying party sends the browser of the user to"""


class AuthStatus(Enum):
    success = "success"


class AuthResult(BaseModel):
    """The assertion delivered to the relying party"""

    status: AuthStatus
    attributes: dict[str, str] | None = None
    session_url: str | None = None
    """Url the relying party may notify about session activity"""


class DisclosureState(Enum):
    """Where a single disclosure is in its lifecycle"""

    awaiting_confirmation = "AWAITING_CONFIRMATION"
    delivering = "DELIVERING"
    done = "DONE"
    rejected = "REJECTED"
    failed = "FAILED"
