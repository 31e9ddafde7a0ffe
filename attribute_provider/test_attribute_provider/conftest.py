# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import pytest
from fastapi.testclient import TestClient

from common import key_configuration as key

import attribute_provider.config as conf
import attribute_provider.test_attribute_provider.hard_coded as hc


@pytest.fixture(scope="session")
def keys() -> hc.RelyingPartyKeys:
    return hc.RelyingPartyKeys()


@pytest.fixture
def config(request) -> conf.AttributeProviderConfig:
    overrides = getattr(request, "param", {})
    return hc.create_config(**overrides)


@pytest.fixture
def client(config: conf.AttributeProviderConfig, keys: hc.RelyingPartyKeys) -> TestClient:
    from attribute_provider.provider import app

    app.dependency_overrides[conf.get_config] = lambda: config
    app.dependency_overrides[key.get_key_configuration] = lambda: keys.key_configuration
    client = TestClient(app)
    yield client
    client.close()
    app.dependency_overrides.clear()
