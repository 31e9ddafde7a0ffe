# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Turns the authentication result into the opaque token handed to the relying party.

The canonical shape is a nested JWT: the claims
`{"auth_result": <AuthResult>, "iat": <now>, "exp": <now + validity>}`
signed as JWS and encrypted as JWE (`cty: JWT`).
The legacy shape encrypts the bare attribute mapping without signature.
"""

import time

from jwcrypto import common as jw_common

from common import jwt_utils
from common.key_configuration import KeyConfiguration

from attribute_provider import models
from attribute_provider.config import AttributeProviderConfig, TokenProtection
from attribute_provider.exception import TokenProtectionError

# Failures of jwcrypto or the underlying cryptography library
_crypto_errors = (jw_common.JWException, ValueError, TypeError)


class AuthResultProtector:
    def __init__(self, key_configuration: KeyConfiguration) -> None:
        self._keys = key_configuration

    def _protect(self, auth_result: models.AuthResult) -> str:
        raise NotImplementedError()

    def protect(self, auth_result: models.AuthResult) -> str:
        """Throws TokenProtectionError, the cause is kept for logging"""
        try:
            return self._protect(auth_result)
        except _crypto_errors as e:
            raise TokenProtectionError() from e


class SignedEncryptedProtector(AuthResultProtector):
    def __init__(self, key_configuration: KeyConfiguration, validity_seconds: int) -> None:
        super().__init__(key_configuration)
        self._validity_seconds = validity_seconds

    def claims(self, auth_result: models.AuthResult) -> dict:
        issued_at = int(time.time())
        return {
            "auth_result": auth_result.model_dump(mode="json", exclude_none=True),
            "iat": issued_at,
            "exp": issued_at + self._validity_seconds,
        }

    def _protect(self, auth_result: models.AuthResult) -> str:
        return jwt_utils.sign_and_encrypt(self.claims(auth_result), self._keys.signer, self._keys.encrypter)


class EncryptedProtector(AuthResultProtector):
    def _protect(self, auth_result: models.AuthResult) -> str:
        return jwt_utils.encrypt(auth_result.attributes or {}, self._keys.encrypter)


def get_protector(config: AttributeProviderConfig, key_configuration: KeyConfiguration) -> AuthResultProtector:
    if config.token_protection is TokenProtection.encrypt_only:
        return EncryptedProtector(key_configuration)
    return SignedEncryptedProtector(key_configuration, config.token_validity_seconds)
