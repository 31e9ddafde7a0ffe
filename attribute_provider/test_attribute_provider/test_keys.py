# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from fastapi import status
from fastapi.testclient import TestClient
from jwcrypto import jwk

import attribute_provider.test_attribute_provider.hard_coded as hc


def test_jwks_verifies_delivered_token(client: TestClient, keys: hc.RelyingPartyKeys):
    response = client.get("/.well-known/jwks.json")
    assert response.status_code == status.HTTP_200_OK
    published = response.json()["keys"]
    assert len(published) == 1
    assert "d" not in published[0], "Private key must not be published"

    start = client.post("/start_authentication", json={"attributes": ["name"], "continuation": hc.CONTINUATION})
    dologin = hc.dologin_of(client.get(hc.path_of(start.json()["client_url"])).text)
    location = client.get(hc.path_of(dologin), follow_redirects=False).headers["location"]

    verification_key = jwk.JWK(**published[0])
    claims = hc.jwt_utils.decrypt_and_verify(hc.result_of(location), keys.encryption_key, verification_key)
    assert claims["auth_result"]["attributes"] == {"name": "Jane Doe"}
