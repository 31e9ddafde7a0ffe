# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Errors of the disclosure flow.

Client errors (4xx) carry their details into the response.
Internal errors (5xx) render an opaque message; their cause is only written to the log.
"""

from fastapi import HTTPException, status
from pydantic import BaseModel


class DisclosureErrorResponse(BaseModel):
    """
    Error body returned to the relying party.
    * error: Machine readable code identifying the exception
    * error_description: Human readable error description of the error type
    * additional_error_description: Further human readable information on the error
    """

    error: str
    error_description: str
    additional_error_description: str | None = None


class DisclosureError(HTTPException):
    """Base class for all disclosure exceptions."""

    error: str = None
    """Machine readable code identifieng the exception."""

    error_description: str = None
    """Human readable error description for the error type."""

    _fields: list[str] = [
        "error",
        "error_description",
    ]
    """Fields to render into the response."""

    _optional_fields: list[str] = ["additional_error_description"]
    """Optional fiels which only get renderd into the response if available."""

    def __init__(self, status_code: int = status.HTTP_400_BAD_REQUEST, additional_error_description: str = None) -> None:
        super().__init__(status_code, self.error, headers={"Cache-Control": "no-store"})
        self.additional_error_description = additional_error_description

    def as_response(self) -> DisclosureErrorResponse:
        content = {field_name: getattr(self, field_name) for field_name in self._fields}
        for field_name in self._optional_fields:
            if getattr(self, field_name, None) is not None:
                content[field_name] = getattr(self, field_name)
        return DisclosureErrorResponse(**content)


class UnknownAttributeError(DisclosureError):
    """At least one of the requested attributes is not part of the attribute catalog."""

    error = "unknown_attribute"
    error_description = "The request contains attributes which are not provided."

    def __init__(self, unknown_attributes: list[str]) -> None:
        self.unknown_attributes = unknown_attributes
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            f"Unknown attribute(s): {', '.join(unknown_attributes)}",
        )


class InvalidRequestError(DisclosureError):
    """The request is missing a required parameter, includes an invalid parameter value or is otherwise malformed."""

    error = "invalid_request"
    error_description = "The request is missing a required parameter, includes an invalid parameter value or is otherwise malformed."


class InternalDisclosureError(DisclosureError):
    """
    Failure after the request was accepted.
    Never exposes details, those are logged with the request id.
    """

    error = "server_error"
    error_description = "Could not process the request."

    def __init__(self) -> None:
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR)


class SegmentDecodeError(InternalDisclosureError):
    """A path segment is not valid url safe base64 or does not contain the expected content.
    Segments are created by this service, so this only happens if they were tampered with."""


class InconsistentCatalogError(InternalDisclosureError):
    """The attributes accepted at the start of the flow are no longer part of the catalog."""


class TokenProtectionError(InternalDisclosureError):
    """Signing or encrypting the authentication result failed."""
