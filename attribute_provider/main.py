# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

# Run from the repository root as module, so the package imports resolve:
# python -m attribute_provider.main
import os

import uvicorn

if __name__ == '__main__':
    # HTTP
    uvicorn.run("attribute_provider.provider:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=True)
    # HTTPS
    # uvicorn.run("attribute_provider.provider:app", host="0.0.0.0", port=8000, ssl_keyfile="cert/private.pem", ssl_certfile="cert/public.pem")
