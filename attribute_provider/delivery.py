# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Lifecycle of a single disclosure.

    start -> AWAITING_CONFIRMATION -> DELIVERING -> DONE
      |                                   |
    REJECTED (unknown attribute)        FAILED (decoding / crypto)

The protocol parameters travel as path segments created at the start.
They are passed on unchanged until they are decoded for the delivery.
"""

import contextlib
import logging

import common.httpx_wrapper as httpxw
from common.key_configuration import KeyConfiguration

from attribute_provider import codec, models
from attribute_provider.assertion import build_auth_result
from attribute_provider.config import AttributeProviderConfig
from attribute_provider.exception import InconsistentCatalogError, InternalDisclosureError, UnknownAttributeError
from attribute_provider.logging import DisclosureOperationsLogEntry
from attribute_provider.protection import get_protector

_logger = logging.getLogger(__name__)

CONFIRM_PATH = "/confirm"
DELIVERY_PATH = "/browser"
JWT_CONTENT_TYPE = "application/jwt"

INLINE = "INLINE"
OUT_OF_BAND = "OUT_OF_BAND"


def _log_entry(
    message: str,
    step: DisclosureOperationsLogEntry.Step,
    state: models.DisclosureState,
    status: DisclosureOperationsLogEntry.Status = DisclosureOperationsLogEntry.Status.success,
    **kwargs,
) -> DisclosureOperationsLogEntry:
    return DisclosureOperationsLogEntry(
        message=message,
        status=status,
        operation=DisclosureOperationsLogEntry.Operation.disclosure,
        step=step,
        state=state,
        **kwargs,
    )


def _delivery_mode(segments: list[str]) -> str:
    return OUT_OF_BAND if len(segments) > 2 else INLINE


def _link(server_url: str, path: str, segments: list[str]) -> str:
    return "/".join([f"{server_url}{path}", *segments])


def start_authentication(request: models.StartAuthRequest, config: AttributeProviderConfig) -> models.StartAuthResponse:
    """
    Validates the requested attributes and returns the link to the confirmation page.
    Throws UnknownAttributeError, no link is created in that case.
    """
    try:
        config.attribute_catalog.verify(request.attributes)
    except UnknownAttributeError as e:
        _logger.info(
            _log_entry(
                "Rejected disclosure request.",
                DisclosureOperationsLogEntry.Step.disclosure_start,
                models.DisclosureState.rejected,
                status=DisclosureOperationsLogEntry.Status.error,
                error_code=e.error,
            )
        )
        raise

    segments = [codec.encode_attributes(request.attributes), codec.encode_url(request.continuation)]
    if request.attr_url is not None:
        segments.append(codec.encode_url(request.attr_url))

    _logger.info(
        _log_entry(
            "Started disclosure.",
            DisclosureOperationsLogEntry.Step.disclosure_start,
            models.DisclosureState.awaiting_confirmation,
            delivery_mode=_delivery_mode(segments),
        )
    )
    return models.StartAuthResponse(client_url=_link(config.server_url, CONFIRM_PATH, segments))


def confirmation_link(segments: list[str], config: AttributeProviderConfig) -> str:
    """Link from the confirmation page to the delivery, carrying the segments exactly as received"""
    _logger.info(
        _log_entry(
            "Confirmation requested.",
            DisclosureOperationsLogEntry.Step.disclosure_confirmation,
            models.DisclosureState.awaiting_confirmation,
            delivery_mode=_delivery_mode(segments),
        )
    )
    return _link(config.server_url, DELIVERY_PATH, segments)


@contextlib.contextmanager
def _delivery(delivery_mode: str):
    """Logs the failure of a delivery, the error itself is passed on"""
    try:
        yield
    except InternalDisclosureError as e:
        _logger.info(
            _log_entry(
                "Disclosure failed.",
                DisclosureOperationsLogEntry.Step.disclosure_delivery,
                models.DisclosureState.failed,
                status=DisclosureOperationsLogEntry.Status.error,
                delivery_mode=delivery_mode,
                error_code=type(e).__name__,
            )
        )
        raise


def create_token(attributes_segment: str, config: AttributeProviderConfig, key_configuration: KeyConfiguration) -> str:
    """
    Decodes the requested attributes, resolves them in the catalog
    and returns the protected authentication result.
    Throws SegmentDecodeError, InconsistentCatalogError, TokenProtectionError
    """
    names = codec.decode_attributes(attributes_segment)
    try:
        attributes = config.attribute_catalog.resolve(names)
    except UnknownAttributeError as e:
        raise InconsistentCatalogError() from e
    auth_result = build_auth_result(attributes, config.with_session, config.internal_url)
    return get_protector(config, key_configuration).protect(auth_result)


def append_result(continuation: str, token: str) -> str:
    separator = "&" if "?" in continuation else "?"
    return f"{continuation}{separator}result={token}"


def deliver_inline(attributes: str, continuation: str, config: AttributeProviderConfig, key_configuration: KeyConfiguration) -> str:
    """Returns the continuation url with the token as `result` query parameter"""
    with _delivery(INLINE):
        token = create_token(attributes, config, key_configuration)
        continuation_url = codec.decode_url(continuation)

    _logger.info(
        _log_entry(
            "Redirecting user with authentication result.",
            DisclosureOperationsLogEntry.Step.disclosure_delivery,
            models.DisclosureState.done,
            delivery_mode=INLINE,
        )
    )
    return append_result(continuation_url, token)


async def report_auth_result(attr_url: str, token: str, config: AttributeProviderConfig) -> None:
    """
    POSTs the token to the relying party.
    Nothing raised while calling the relying party reaches the caller, failures are only logged.
    """
    try:
        await httpxw.post(attr_url, token, JWT_CONTENT_TYPE, config, timeout=config.callback_timeout)
    except Exception as e:  # e.g. httpx.HTTPError, httpx.InvalidURL or an IDNA UnicodeError of the host
        _logger.warning(
            _log_entry(
                f"Failure reporting authentication result: {e}",
                DisclosureOperationsLogEntry.Step.disclosure_callback,
                models.DisclosureState.delivering,
                status=DisclosureOperationsLogEntry.Status.error,
                delivery_mode=OUT_OF_BAND,
                error_code=type(e).__name__,
            )
        )
        return

    _logger.info(
        _log_entry(
            f"Reported authentication result to {attr_url}.",
            DisclosureOperationsLogEntry.Step.disclosure_callback,
            models.DisclosureState.delivering,
            delivery_mode=OUT_OF_BAND,
        )
    )


async def deliver_out_of_band(
    attributes: str,
    continuation: str,
    attr_url: str,
    config: AttributeProviderConfig,
    key_configuration: KeyConfiguration,
) -> str:
    """
    POSTs the token to the decoded `attr_url` and returns the continuation url unchanged.
    The outcome of the POST never influences the returned url.
    """
    with _delivery(OUT_OF_BAND):
        token = create_token(attributes, config, key_configuration)
        continuation_url = codec.decode_url(continuation)
        callback_url = codec.decode_url(attr_url)

    await report_auth_result(callback_url, token, config)

    _logger.info(
        _log_entry(
            "Redirecting user.",
            DisclosureOperationsLogEntry.Step.disclosure_delivery,
            models.DisclosureState.done,
            delivery_mode=OUT_OF_BAND,
        )
    )
    return continuation_url
