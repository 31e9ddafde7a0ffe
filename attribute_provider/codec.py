# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Encoding of the protocol parameters into url path segments.

Segments are url safe base64 without padding, so they survive being used as path segments.
The attribute names are carried as JSON array, urls as plain UTF-8.
"""

import binascii
import json

from common import parsing

from attribute_provider.exception import SegmentDecodeError


def encode_segment(data: bytes) -> str:
    return parsing.bytes_to_url_safe(data)


def decode_segment(segment: str) -> bytes:
    """Throws SegmentDecodeError if the segment is not url safe base64"""
    try:
        return parsing.bytes_from_url_safe(segment)
    except (binascii.Error, ValueError) as e:
        raise SegmentDecodeError() from e


def encode_attributes(attributes: list[str]) -> str:
    return encode_segment(json.dumps(attributes).encode())


def decode_attributes(segment: str) -> list[str]:
    """Throws SegmentDecodeError if the segment does not contain a JSON array of strings"""
    data = decode_segment(segment)
    try:
        attributes = json.loads(data.decode("utf-8"))
    except ValueError as e:
        # UnicodeDecodeError & JSONDecodeError
        raise SegmentDecodeError() from e
    if not isinstance(attributes, list) or not all(isinstance(a, str) for a in attributes):
        raise SegmentDecodeError() from TypeError(f"Expected a list of attribute names, got {type(attributes).__name__}")
    return attributes


def encode_url(url: str) -> str:
    return encode_segment(url.encode("utf-8"))


def decode_url(segment: str) -> str:
    """Throws SegmentDecodeError if the segment does not contain an UTF-8 string"""
    data = decode_segment(segment)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SegmentDecodeError() from e
