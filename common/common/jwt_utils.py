# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import json

from jwcrypto import jwe, jwk, jws

from common.key_configuration import Encrypter, Signer


def canonical_json(data: dict) -> str:
    """Deterministic JSON form: sorted keys, no insignificant whitespace."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def split_jwt(jwt: str) -> list[str]:
    """
    Splits a compact JWT into its parts.
    JWS: header, body, signature
    JWE: header, encrypted key, iv, ciphertext, tag
    """
    return jwt.split(".")


def is_jwe(jwt: str) -> bool:
    """
    Checks if the compact JWT is encrypted.
    """
    return len(split_jwt(jwt)) == 5


def sign_and_encrypt(payload: dict, signer: Signer, encrypter: Encrypter) -> str:
    """
    Nested JWT: the payload is signed as JWS first,
    the JWS is then encrypted as JWE with content type JWT.
    """
    signed = signer.sign(canonical_json(payload))
    return encrypter.encrypt(signed, header={"cty": "JWT"})


def encrypt(payload: dict, encrypter: Encrypter) -> str:
    """
    JWE of the payload without inner signature.
    """
    return encrypter.encrypt(canonical_json(payload))


def decrypt(token: str, decryption_key: jwk.JWK) -> str:
    """
    Returns the plaintext of a compact JWE.
    Throws jwcrypto.jwe.InvalidJWEData if the token can not be decrypted with the key.
    """
    encrypted = jwe.JWE()
    encrypted.deserialize(token, key=decryption_key)
    return encrypted.payload.decode("utf-8")


def decrypt_and_verify(token: str, decryption_key: jwk.JWK, verification_key: jwk.JWK) -> dict:
    """
    Counterpart of `sign_and_encrypt` as used by relying parties.
    Throws jwcrypto.jws.InvalidJWSSignature if the inner signature does not match the verification key.
    """
    signed = jws.JWS()
    signed.deserialize(decrypt(token, decryption_key), key=verification_key)
    return json.loads(signed.payload)
