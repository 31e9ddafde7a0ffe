# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Test data & helpers acting as the relying party
"""

import re
import urllib.parse

from jwcrypto import jwk

from common import jwt_utils
from common.key_configuration import KeyConfig, KeyConfiguration, KeyType, create_encrypter, create_signer

from attribute_provider.catalog import AttributeCatalog
from attribute_provider.config import AttributeProviderConfig

SERVER_URL = "https://provider.example"
INTERNAL_URL = "http://provider.internal:8000"
CONTINUATION = "https://rp.example/done"
CALLBACK_URL = "https://rp.example/attributes"

ATTRIBUTES = {
    "email": "a@b.com",
    "name": "Jane Doe",
    "age_over_18": "true",
}

_DOLOGIN_PATTERN = re.compile(r'id="dologin" href="([^"]+)"')


def generate_key(key_type: KeyType) -> jwk.JWK:
    if key_type is KeyType.rsa:
        return jwk.JWK.generate(kty="RSA", size=2048)
    return jwk.JWK.generate(kty="EC", crv="P-256")


def private_pem(key: jwk.JWK) -> str:
    return key.export_to_pem(private_key=True, password=None).decode()


def public_pem(key: jwk.JWK) -> str:
    return key.export_to_pem().decode()


class RelyingPartyKeys:
    """
    Signing key of the provider & encryption key of the relying party.
    The relying party holds the private encryption key and the public signing key.
    """

    def __init__(self, signing_type: KeyType = KeyType.ec, encryption_type: KeyType = KeyType.ec) -> None:
        self.signing_key = generate_key(signing_type)
        self.encryption_key = generate_key(encryption_type)
        self.key_configuration = KeyConfiguration(
            create_signer(KeyConfig(type=signing_type, key=private_pem(self.signing_key))),
            create_encrypter(KeyConfig(type=encryption_type, key=public_pem(self.encryption_key))),
        )

    @property
    def verification_key(self) -> jwk.JWK:
        return jwk.JWK.from_pem(public_pem(self.signing_key).encode())

    def open(self, token: str) -> dict:
        """Decrypt and verify a sign & encrypt token"""
        return jwt_utils.decrypt_and_verify(token, self.encryption_key, self.verification_key)


def create_config(**overrides) -> AttributeProviderConfig:
    config = AttributeProviderConfig()
    config.server_url = SERVER_URL
    config.internal_url = INTERNAL_URL
    config.attribute_catalog = AttributeCatalog(ATTRIBUTES)
    config.with_session = False
    for name, value in overrides.items():
        setattr(config, name, value)
    return config


def path_of(url: str) -> str:
    return urllib.parse.urlsplit(url).path


def segments_of(url: str) -> list[str]:
    """Path segments following the endpoint name, e.g. /confirm/<a>/<b> -> [<a>, <b>]"""
    return path_of(url).split("/")[2:]


def dologin_of(html: str) -> str:
    match = _DOLOGIN_PATTERN.search(html)
    assert match, "Confirmation page has to contain the delivery link"
    return match.group(1)


def result_of(location: str) -> str:
    return urllib.parse.parse_qs(urllib.parse.urlsplit(location).query)["result"][0]
