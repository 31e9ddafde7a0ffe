# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import fastapi

from common import key_configuration as key

TAG = "Keys"

router = fastapi.APIRouter(prefix="/.well-known", tags=[TAG])


@router.get("/jwks.json", description="Public key relying parties use to verify the signature of the authentication result")
def get_jwks(key_configuration: key.inject) -> dict:
    return key_configuration.jwks
