# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Outgoing requests to other parties, with the context needed to analyse failures"""

import httpx

from common import config as conf


async def post(url: str, content: str, content_type: str, config: conf.Config, timeout: float = 10.0) -> httpx.Response:
    """
    POSTs `content` and returns the response, which has a success status.

    Throws httpx.HTTPStatusError for any other status.
    Throws httpx.ConnectError, noted with url & ssl verification, as the error of httpx
        only states e.g. '[Errno -2] Name or service not known'.
    Throws anything else httpx raises on the way, e.g. httpx.InvalidURL or httpx.TimeoutException.
    """
    async with httpx.AsyncClient(verify=config.enable_ssl_verification, timeout=timeout) as client:
        try:
            response = await client.post(url, content=content, headers={"Content-Type": content_type})
        except httpx.ConnectError as e:
            e.add_note(f"POST {url} failed, ssl verification {'on' if config.enable_ssl_verification else 'off'}")
            raise
    response.raise_for_status()
    return response
