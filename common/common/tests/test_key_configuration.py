# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import json

import pytest
from jwcrypto import jwk, jws, common as jw_common

from common import jwt_utils
from common import key_configuration as key


def _private_pem(k: jwk.JWK) -> str:
    return k.export_to_pem(private_key=True, password=None).decode()


def _public_pem(k: jwk.JWK) -> str:
    return k.export_to_pem().decode()


@pytest.fixture(scope="module")
def ec_key() -> jwk.JWK:
    return jwk.JWK.generate(kty="EC", crv="P-256")


@pytest.fixture(scope="module")
def rsa_key() -> jwk.JWK:
    return jwk.JWK.generate(kty="RSA", size=2048)


def _header(token: str) -> dict:
    return json.loads(jw_common.base64url_decode(jwt_utils.split_jwt(token)[0]))


@pytest.mark.parametrize(
    "key_type, algorithm, encryption_algorithm",
    [
        (key.KeyType.ec, "ES256", "ECDH-ES"),
        (key.KeyType.rsa, "RS256", "RSA-OAEP"),
    ],
)
def test_algorithms_by_key_type(request, key_type: key.KeyType, algorithm: str, encryption_algorithm: str):
    private_key = request.getfixturevalue("ec_key" if key_type is key.KeyType.ec else "rsa_key")

    signer = key.create_signer(key.KeyConfig(type=key_type, key=_private_pem(private_key)))
    encrypter = key.create_encrypter(key.KeyConfig(type=key_type, key=_public_pem(private_key)))
    assert signer.algorithm == algorithm
    assert encrypter.algorithm == encryption_algorithm

    signed = signer.sign('{"claim":"value"}')
    assert _header(signed) == {"alg": algorithm, "typ": "JWT"}
    verified = jws.JWS()
    verified.deserialize(signed, key=private_key)
    assert json.loads(verified.payload) == {"claim": "value"}

    encrypted = encrypter.encrypt("plaintext")
    header = _header(encrypted)
    assert header["alg"] == encryption_algorithm
    assert header["enc"] == "A128CBC-HS256"
    assert jwt_utils.decrypt(encrypted, private_key) == "plaintext"


def test_nested_token(ec_key: jwk.JWK, rsa_key: jwk.JWK):
    signer = key.create_signer(key.KeyConfig(type="EC", key=_private_pem(ec_key)))
    encrypter = key.create_encrypter(key.KeyConfig(type="RSA", key=_public_pem(rsa_key)))

    token = jwt_utils.sign_and_encrypt({"b": 1, "a": "ä"}, signer, encrypter)
    assert jwt_utils.is_jwe(token)
    assert _header(token)["cty"] == "JWT"
    assert jwt_utils.decrypt_and_verify(token, rsa_key, ec_key) == {"a": "ä", "b": 1}

    other_key = jwk.JWK.generate(kty="EC", crv="P-256")
    with pytest.raises(jws.InvalidJWSSignature):
        jwt_utils.decrypt_and_verify(token, rsa_key, other_key)


def test_canonical_json():
    assert jwt_utils.canonical_json({"b": [1, 2], "a": {"d": None, "c": "ü"}}) == '{"a":{"c":"ü","d":null},"b":[1,2]}'


def test_signer_requires_private_key(ec_key: jwk.JWK):
    with pytest.raises(key.KeyConfigurationError):
        key.create_signer(key.KeyConfig(type=key.KeyType.ec, key=_public_pem(ec_key)))


def test_invalid_key_does_not_leak(rsa_key: jwk.JWK):
    broken = _private_pem(rsa_key)[:200]
    with pytest.raises(key.KeyConfigurationError) as e:
        key.create_signer(key.KeyConfig(type=key.KeyType.rsa, key=broken))
    assert broken not in str(e.value)
    assert e.value.__cause__ is None


def test_load_from_environment(monkeypatch, tmp_path, ec_key: jwk.JWK, rsa_key: jwk.JWK):
    monkeypatch.setenv("SIGNING_KEY_TYPE", "RSA")
    monkeypatch.setenv("SIGNING_KEY_PRIVATE", _private_pem(rsa_key))
    monkeypatch.delenv("ENCRYPTION_KEY_TYPE", raising=False)
    monkeypatch.delenv("ENCRYPTION_KEY_PUBLIC", raising=False)
    (tmp_path / "encryption_public.pem").write_text(_public_pem(ec_key))

    key_configuration = key.KeyConfiguration.load(str(tmp_path))
    assert isinstance(key_configuration.signer, key.RSASigner)
    assert isinstance(key_configuration.encrypter, key.ECEncrypter)
    assert key_configuration.jwks["keys"][0]["kty"] == "RSA"
    assert "d" not in key_configuration.jwks["keys"][0], "Only the public key is published"


def test_load_unknown_key_type(monkeypatch, ec_key: jwk.JWK):
    monkeypatch.setenv("SIGNING_KEY_TYPE", "DSA")
    monkeypatch.setenv("SIGNING_KEY_PRIVATE", _private_pem(ec_key))
    monkeypatch.setenv("ENCRYPTION_KEY_PUBLIC", _public_pem(ec_key))
    with pytest.raises(key.KeyConfigurationError):
        key.KeyConfiguration.load()
