# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from attribute_provider import models

SESSION_UPDATE_PATH = "/session/update"


def build_auth_result(attributes: dict[str, str], with_session: bool, internal_url: str) -> models.AuthResult:
    """
    Successful authentication result for the resolved attributes.
    Advertises the session update endpoint if sessions are enabled.
    """
    return models.AuthResult(
        status=models.AuthStatus.success,
        attributes=attributes,
        session_url=f"{internal_url}{SESSION_UPDATE_PATH}" if with_session else None,
    )
