# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
The static attributes this provider discloses about "the current user".
"""

import json
import types
from collections.abc import Iterable, Mapping

from attribute_provider.exception import UnknownAttributeError


class AttributeCatalog:
    """
    Read only mapping from attribute name to attribute value.
    Built once from the configuration, never changed afterwards.
    """

    def __init__(self, attributes: Mapping[str, str]) -> None:
        self._attributes = types.MappingProxyType(dict(attributes))

    @staticmethod
    def from_json(raw: str) -> "AttributeCatalog":
        """
        Load from a JSON object with string values, e.g. `{"email": "user@example.com"}`.
        Throws ValueError if the JSON is not an object of strings.
        """
        attributes = json.loads(raw)
        if not isinstance(attributes, dict) or not all(isinstance(v, str) for v in attributes.values()):
            raise ValueError("Attributes have to be configured as JSON object with string values")
        return AttributeCatalog(attributes)

    @property
    def attributes(self) -> Mapping[str, str]:
        return self._attributes

    def __contains__(self, name: str) -> bool:
        return name in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)

    def unknown(self, names: Iterable[str]) -> list[str]:
        """All names not in the catalog, in requested order without duplicates"""
        return list(dict.fromkeys(name for name in names if name not in self._attributes))

    def verify(self, names: Iterable[str]) -> None:
        """Throws UnknownAttributeError listing every name which is not in the catalog."""
        unknown = self.unknown(names)
        if unknown:
            raise UnknownAttributeError(unknown)

    def resolve(self, names: Iterable[str]) -> dict[str, str]:
        """
        Catalog values for exactly the requested names.
        Throws UnknownAttributeError listing every name which is not in the catalog.
        """
        names = list(names)
        self.verify(names)
        return {name: self._attributes[name] for name in names}
