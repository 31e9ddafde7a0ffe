# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import pytest

from attribute_provider.catalog import AttributeCatalog
from attribute_provider.exception import UnknownAttributeError
import attribute_provider.test_attribute_provider.hard_coded as hc


@pytest.fixture
def catalog() -> AttributeCatalog:
    return AttributeCatalog(hc.ATTRIBUTES)


@pytest.mark.parametrize(
    "names",
    [
        [],
        ["email"],
        ["email", "name"],
        ["age_over_18", "name", "email"],
    ],
)
def test_resolve_known_attributes(catalog: AttributeCatalog, names: list[str]):
    catalog.verify(names)
    assert catalog.resolve(names) == {name: hc.ATTRIBUTES[name] for name in names}


@pytest.mark.parametrize(
    "names, unknown",
    [
        (["phone"], ["phone"]),
        (["email", "phone"], ["phone"]),
        (["phone", "email", "address", "phone"], ["phone", "address"]),
    ],
)
def test_unknown_attributes_are_rejected(catalog: AttributeCatalog, names: list[str], unknown: list[str]):
    with pytest.raises(UnknownAttributeError) as verify_error:
        catalog.verify(names)
    assert verify_error.value.unknown_attributes == unknown
    assert verify_error.value.status_code == 400

    with pytest.raises(UnknownAttributeError) as resolve_error:
        catalog.resolve(names)
    assert resolve_error.value.unknown_attributes == unknown
    for name in unknown:
        assert name in resolve_error.value.additional_error_description


def test_catalog_is_read_only(catalog: AttributeCatalog):
    source = dict(hc.ATTRIBUTES)
    catalog = AttributeCatalog(source)
    source["phone"] = "+41 00 000 00 00"
    assert "phone" not in catalog, "Catalog must not follow changes of its source"

    with pytest.raises(TypeError):
        catalog.attributes["email"] = "other@b.com"

    resolved = catalog.resolve(["email"])
    resolved["email"] = "other@b.com"
    assert catalog.resolve(["email"]) == {"email": "a@b.com"}


def test_from_json():
    catalog = AttributeCatalog.from_json('{"email": "a@b.com"}')
    assert catalog.attributes == {"email": "a@b.com"}
    assert len(AttributeCatalog.from_json("{}")) == 0

    for invalid in ['["email"]', '{"age": 18}', 'email']:
        with pytest.raises(ValueError):
            AttributeCatalog.from_json(invalid)
