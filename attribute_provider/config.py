# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import os
import pathlib
from enum import Enum
from functools import cache
from typing import Annotated

from fastapi import Depends, templating

import common.config as conf
from common.parsing import interpret_as_bool

from attribute_provider.catalog import AttributeCatalog

_package_directory = pathlib.Path(__file__).parent


class TokenProtection(Enum):
    """How the authentication result is protected for the relying party"""

    sign_and_encrypt = "SIGN_AND_ENCRYPT"
    """JWS of the authentication result, encrypted as JWE"""
    encrypt_only = "ENCRYPT_ONLY"
    """JWE of the bare attribute mapping"""


def _load_attributes() -> AttributeCatalog:
    attributes_file = os.getenv("ATTRIBUTES_FILE")
    if attributes_file:
        with open(attributes_file) as f:
            return AttributeCatalog.from_json(f.read())
    return AttributeCatalog.from_json(os.getenv("ATTRIBUTES", "{}"))


class AttributeProviderConfig(conf.Config):
    def __init__(self):
        super().__init__()
        self.app_name = os.getenv("APP_NAME", "Attribute Provider")
        self.server_url = os.getenv("EXTERNAL_URL", "http://localhost:8000").rstrip("/")
        """Public url of this service, used for the links handed to the browser"""
        self.internal_url = os.getenv("INTERNAL_URL", self.server_url).rstrip("/")
        """Url under which the relying party reaches this service, used for the session update url"""

        self.attribute_catalog = _load_attributes()
        """Attributes which can be disclosed. Configured with ATTRIBUTES (JSON) or ATTRIBUTES_FILE"""

        self.with_session: bool = interpret_as_bool(os.getenv("WITH_SESSION", "False"))
        """Advertise the session update endpoint to the relying party"""

        self.token_protection = TokenProtection(os.getenv("TOKEN_PROTECTION", TokenProtection.sign_and_encrypt.value))
        self.token_validity_seconds = int(os.getenv("TOKEN_VALIDITY_SECONDS", 300))
        """Lifetime of a signed authentication result"""

        self.callback_timeout = float(os.getenv("CALLBACK_TIMEOUT", 10))
        """Seconds to wait on the relying party when delivering out of band"""

        # Templates
        self.template_directory = os.getenv("TEMPLATE_BASE_DIR", str(_package_directory / "templates"))
        """Base directory for jinja"""
        self.confirm_template = os.getenv("TEMPLATE_CONFIRM", "confirm_auth.html")
        """Template for the confirmation page, gets the link to continue as `dologin`"""

    def has_minimum_config(self) -> bool:
        return bool(self.server_url) and len(self.attribute_catalog) > 0

    @cache
    def get_template_resource(self) -> templating.Jinja2Templates:
        return templating.Jinja2Templates(self.template_directory)


@cache
def get_config() -> AttributeProviderConfig:
    """The configuration is read once and shared by all requests"""
    return AttributeProviderConfig()


inject = Annotated[AttributeProviderConfig, Depends(get_config)]
