# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import base64
import binascii
import re

_url_safe_base64 = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def bytes_to_url_safe(data: bytes) -> str:
    """Encode bytes to an url safe base64 string without padding."""
    return remove_padding(base64.urlsafe_b64encode(data).decode())


def bytes_from_url_safe(data: str) -> bytes:
    """
    Decode an url safe base64 string, with or without padding.
    Throws binascii.Error if data contains characters outside of the url safe alphabet
    (this includes `+` and `/` of standard base64) or has an impossible length.
    """
    if not _url_safe_base64.fullmatch(data):
        raise binascii.Error("Only url safe base64 characters are allowed")
    return base64.b64decode(pad(data), altchars=b'-_', validate=True)


def remove_padding(base64_encoded: str) -> str:
    """Remove padding form b64 encoded string"""
    return base64_encoded.rstrip('=')


def pad(base64_encoded: str) -> str:
    """Add exactly the padding (=) needed for a b64 encoded string, so it can be decoded strictly"""
    base64_encoded = remove_padding(base64_encoded)
    return base64_encoded + '=' * (-len(base64_encoded) % 4)


def interpret_as_bool(boolify: str) -> bool:
    """
    Converts an inpput to an boolean according to commonly used patterns.
    """
    if isinstance(boolify, bool):
        return boolify
    if isinstance(boolify, int):
        return boolify > 0
    elif isinstance(boolify, str):
        return re.match(r"^(y|yes|1|true)$", boolify, re.IGNORECASE | re.MULTILINE) is not None
    raise Exception(f"Can't boolify a {boolify}.")
