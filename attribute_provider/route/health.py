# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""This file defines the custom health checks for the application."""

import logging
import os

from fastapi import Response

from common import health
from common.key_configuration import KeyConfigurationError, get_key_configuration

from attribute_provider import config as conf

_logger = logging.getLogger(__name__)


class HealthResponse(health.HealthResponse):
    """Response body model for health request operation."""

    configuration_attribute_provider_has_minimum_config: health.HealthStatus | bool = health.HealthStatus.unhealthy
    configuration_attribute_provider_has_keys: health.HealthStatus | bool = health.HealthStatus.unhealthy
    configuration_attribute_provider_has_confirm_template: health.HealthStatus | bool = health.HealthStatus.unhealthy


def _has_keys() -> bool:
    try:
        get_key_configuration()
    except (KeyConfigurationError, OSError) as e:
        _logger.warning(f"Key configuration not available: {e}")
        return False
    return True


class AttributeProviderHealthAPIRouter(health.HealthAPIRouter):
    def __init__(self) -> None:
        super().__init__(response_model=HealthResponse)

    def _check_configuration(self, response: Response, config: conf.AttributeProviderConfig) -> HealthResponse:
        result = HealthResponse(
            configuration_attribute_provider_has_minimum_config=config.has_minimum_config(),
            configuration_attribute_provider_has_keys=_has_keys(),
            configuration_attribute_provider_has_confirm_template=os.path.isfile(os.path.join(config.template_directory, config.confirm_template)),
        )
        return self.resolve_probe(result, response)

    def get_debug_probe(self, response: Response, config: conf.inject) -> HealthResponse:
        return self._check_configuration(response, config)

    def get_readiness_probe(self, response: Response, config: conf.inject) -> HealthResponse:
        return self._check_configuration(response, config)


router = AttributeProviderHealthAPIRouter()
