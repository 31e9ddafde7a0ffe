# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Collection for loading and returning cryptographic keys in the required formats.

Keys are configured tagged with their algorithm family (RSA or EC).
The family decides which signing and encryption algorithms are used:

| type | signing | key encryption |
|------|---------|----------------|
| RSA  | RS256   | RSA-OAEP       |
| EC   | ES256   | ECDH-ES        |
"""

import contextlib
import logging
import os
from enum import Enum
from functools import cache
from typing import Annotated

from fastapi import Depends
from jwcrypto import jwe, jwk, jws, common as jw_common
from pydantic import BaseModel

_logger = logging.getLogger(__name__)

CONTENT_ENCRYPTION_ALGORITHM = "A128CBC-HS256"


class KeyConfigurationError(Exception):
    """The configured key material could not be used. Never carries the key material itself."""


class KeyType(Enum):
    rsa = "RSA"
    ec = "EC"


class KeyConfig(BaseModel):
    """Key as found in the configuration, tagged by its algorithm family"""

    type: KeyType
    key: str
    """PEM encoded key"""


def _load_key_file(key_file: str) -> str:
    with open(key_file) as f:
        return f.read()


def _load_key(env_var: str, file: str) -> str:
    key = os.getenv(env_var)
    if not key:
        key = _load_key_file(file)
    return key


def _import_pem(pem: str) -> jwk.JWK:
    return jwk.JWK.from_pem(pem.encode())


class Signer:
    """Signs payloads as compact JWS with a private key."""

    algorithm: str = None

    def __init__(self, private_key: str) -> None:
        self._private_jwk = _import_pem(private_key)
        if not self._private_jwk.has_private:
            raise ValueError("Signing requires a private key")

    def sign(self, payload: str, header: dict = None) -> str:
        header = dict(header or {})
        header.setdefault('typ', 'JWT')
        header['alg'] = self.algorithm

        signer = jws.JWS(payload)
        signer.add_signature(key=self._private_jwk, protected=jw_common.json_encode(header))
        return signer.serialize(compact=True)

    @property
    def public_jwk(self) -> dict:
        """Public part of the signing key, for relying parties to verify the signature"""
        return self._private_jwk.export_public(as_dict=True)


class RSASigner(Signer):
    algorithm = "RS256"


class ECSigner(Signer):
    algorithm = "ES256"


class Encrypter:
    """Encrypts payloads as compact JWE for the holder of the private key."""

    algorithm: str = None
    encryption: str = CONTENT_ENCRYPTION_ALGORITHM

    def __init__(self, public_key: str) -> None:
        self._public_jwk = _import_pem(public_key)

    def encrypt(self, plaintext: str, header: dict = None) -> str:
        header = dict(header or {})
        header['alg'] = self.algorithm
        header['enc'] = self.encryption

        encrypter = jwe.JWE(plaintext.encode(), protected=jw_common.json_encode(header))
        encrypter.add_recipient(self._public_jwk)
        return encrypter.serialize(compact=True)


class RSAEncrypter(Encrypter):
    algorithm = "RSA-OAEP"


class ECEncrypter(Encrypter):
    algorithm = "ECDH-ES"


_signers: dict[KeyType, type[Signer]] = {
    KeyType.rsa: RSASigner,
    KeyType.ec: ECSigner,
}

_encrypters: dict[KeyType, type[Encrypter]] = {
    KeyType.rsa: RSAEncrypter,
    KeyType.ec: ECEncrypter,
}


def create_signer(key_config: KeyConfig) -> Signer:
    try:
        return _signers[key_config.type](key_config.key)
    except (ValueError, TypeError, jw_common.JWException):
        # Drop the cause, it could contain secrets
        raise KeyConfigurationError(f"Failure to parse {key_config.type.value} signing key") from None


def create_encrypter(key_config: KeyConfig) -> Encrypter:
    try:
        return _encrypters[key_config.type](key_config.key)
    except (ValueError, TypeError, jw_common.JWException):
        raise KeyConfigurationError(f"Failure to parse {key_config.type.value} encryption key") from None


class KeyConfiguration:
    """
    Holds the signer (private key) & encrypter (public key of the relying party)
    """

    @staticmethod
    def load(key_folder: str = "cert") -> "KeyConfiguration":
        try:
            signing_key = KeyConfig(
                type=os.getenv("SIGNING_KEY_TYPE", KeyType.ec.value),
                key=_load_key(env_var="SIGNING_KEY_PRIVATE", file=f"{key_folder}/signing_private.pem"),
            )
            encryption_key = KeyConfig(
                type=os.getenv("ENCRYPTION_KEY_TYPE", KeyType.ec.value),
                key=_load_key(env_var="ENCRYPTION_KEY_PUBLIC", file=f"{key_folder}/encryption_public.pem"),
            )
        except ValueError:
            raise KeyConfigurationError("Unknown key type, expected one of RSA, EC") from None
        return KeyConfiguration(create_signer(signing_key), create_encrypter(encryption_key))

    def __init__(self, signer: Signer, encrypter: Encrypter):
        self.signer = signer
        self.encrypter = encrypter

    @property
    def jwks(self) -> dict:
        """
        JSON Web Key Set with public signing key
        """
        return {"keys": [self.signer.public_jwk]}


@cache
def get_key_configuration() -> KeyConfiguration:
    return KeyConfiguration.load(os.getenv("KEY_FOLDER", "cert"))


@contextlib.contextmanager
def key_configuration_lifespan() -> contextlib.AbstractContextManager:
    """
    Lifespan loading the key material once at startup,
    so broken keys are noticed before the first request arrives.
    """
    key_configuration = get_key_configuration()
    _logger.info(
        f"Loaded signer {key_configuration.signer.algorithm} and encrypter {key_configuration.encrypter.algorithm}/{key_configuration.encrypter.encryption}."
    )
    yield


inject = Annotated[KeyConfiguration, Depends(get_key_configuration)]
