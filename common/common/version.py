# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import os
from importlib import metadata

DISTRIBUTION_NAME = "mock-attribute-provider"

commit_hash = os.getenv("COMMIT_HASH", "no hash")
commit_time = os.getenv("COMMIT_TIMESTAMP", "no timestamp")


def _distribution_version() -> str:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "no version"


def get_version() -> str:
    """Version as provided by the build (VERSION) or the installed distribution, with commit information."""
    version = os.getenv("VERSION") or _distribution_version()
    return f"{version} ({commit_hash} {commit_time})"
