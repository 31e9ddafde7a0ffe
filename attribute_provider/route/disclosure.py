# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Endpoints of the disclosure flow, in the order they are used:

1. relying party: POST /start_authentication
2. browser: GET /confirm/... (jinja2 template)
3. browser: GET /browser/... (redirect back to the relying party)
"""

import logging

import fastapi
from fastapi import status
from fastapi.responses import HTMLResponse, RedirectResponse
import jinja2

from common import key_configuration as key

import attribute_provider.config as conf
import attribute_provider.delivery as delivery
import attribute_provider.models as models
from attribute_provider.exception import DisclosureErrorResponse

_logger = logging.getLogger(__name__)

TAG = "Disclosure"

router = fastapi.APIRouter(prefix="", tags=[TAG])


@router.post(
    "/start_authentication",
    description="Validates the requested attributes and returns the url to send the user to",
    responses={status.HTTP_400_BAD_REQUEST: {"model": DisclosureErrorResponse}},
)
def start_authentication(request: models.StartAuthRequest, config: conf.inject) -> models.StartAuthResponse:
    return delivery.start_authentication(request, config)


def _received_segments(request: fastapi.Request, count: int) -> list[str]:
    """
    The last `count` path segments as sent by the browser.
    Path parameters are already percent-decoded, the raw path is not.
    """
    raw_path = request.scope.get("raw_path") or request.url.path.encode()
    return raw_path.split(b"?", 1)[0].decode("latin-1").split("/")[-count:]


def _render_confirmation(request: fastapi.Request, segments: list[str], config: conf.AttributeProviderConfig):
    try:
        return config.get_template_resource().TemplateResponse(
            request,
            config.confirm_template,
            {"dologin": delivery.confirmation_link(segments, config)},
        )
    except jinja2.TemplateNotFound:
        _logger.exception(f"Confirmation Template not found: {config.template_directory}/{config.confirm_template}")
        raise fastapi.HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server Configuration Error: Confirmation Template not found.",
        )


@router.get("/confirm/{attributes}/{continuation}", response_class=HTMLResponse, description="Serverside renders the confirmation page for inline delivery")
def confirm_inline(request: fastapi.Request, attributes: str, continuation: str, config: conf.inject):
    return _render_confirmation(request, _received_segments(request, 2), config)


@router.get("/confirm/{attributes}/{continuation}/{attr_url}", response_class=HTMLResponse, description="Serverside renders the confirmation page for out of band delivery")
def confirm_out_of_band(request: fastapi.Request, attributes: str, continuation: str, attr_url: str, config: conf.inject):
    return _render_confirmation(request, _received_segments(request, 3), config)


@router.get(
    "/browser/{attributes}/{continuation}",
    response_class=RedirectResponse,
    status_code=status.HTTP_303_SEE_OTHER,
    description="Redirects the user to the relying party with the authentication result as `result` query parameter",
)
def deliver_inline(attributes: str, continuation: str, config: conf.inject, key_configuration: key.inject):
    return RedirectResponse(
        delivery.deliver_inline(attributes, continuation, config, key_configuration),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get(
    "/browser/{attributes}/{continuation}/{attr_url}",
    response_class=RedirectResponse,
    status_code=status.HTTP_303_SEE_OTHER,
    description="Posts the authentication result to the relying party and redirects the user back",
)
async def deliver_out_of_band(attributes: str, continuation: str, attr_url: str, config: conf.inject, key_configuration: key.inject):
    return RedirectResponse(
        await delivery.deliver_out_of_band(attributes, continuation, attr_url, config, key_configuration),
        status_code=status.HTTP_303_SEE_OTHER,
    )
