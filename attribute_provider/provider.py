# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Mock attribute provider

Discloses a static set of attributes about "the current user" to relying parties.
No identification takes place, every request for known attributes succeeds.

JWS
https://datatracker.ietf.org/doc/html/rfc7515

JWE
https://datatracker.ietf.org/doc/html/rfc7516

Nested JWT
https://datatracker.ietf.org/doc/html/rfc7519#section-5.2
"""

# FastAPI
from asgi_correlation_id import CorrelationIdMiddleware

from common.fastapi_extensions import ExtendedFastAPI
from common.key_configuration import key_configuration_lifespan

from attribute_provider.exception.handler import configure_exception_handlers
import attribute_provider.route.disclosure as disclosure
import attribute_provider.route.session as session
import attribute_provider.route.health as health
import attribute_provider.route.keys as keys
import attribute_provider.config as conf

app = ExtendedFastAPI(
    conf.get_config,
    lifespan_functions=[key_configuration_lifespan()],
)

app.include_router(disclosure.router)
app.include_router(session.router)
app.include_router(keys.router)
app.include_router(health.router)

configure_exception_handlers(app)

app.add_middleware(CorrelationIdMiddleware)
