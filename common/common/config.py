# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Environment settings every service shares.
Services extend `Config` with their own settings and provide a cached factory for injection.
"""

import os

from common.parsing import interpret_as_bool


def _flag(name: str, default: bool) -> bool:
    return interpret_as_bool(os.getenv(name, default))


class Config:
    def __init__(self):
        self.enable_debug_mode: bool = _flag("ENABLE_DEBUG_MODE", False)
        '''Switches the defaults of the flags below to their development values.'''

        self.external_url = os.getenv("EXTERNAL_URL")
        self.app_name = os.getenv("APP_NAME", "anonymous")
        '''Title of the OpenAPI document and `app` of every log line'''
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        self.enable_ssl_verification: bool = _flag("ENABLE_SSL_VERIFICATION", not self.enable_debug_mode)
        '''Verify certificates of outgoing requests. Off in debug mode unless set.'''
        self.enable_documentation_endpoints: bool = _flag("ENABLE_DOCUMENTATION_ENDPOINTS", self.enable_debug_mode)
        '''Serve /docs, /redoc & /openapi.json. Only in debug mode unless set.'''
        self.enable_splunk_log: bool = _flag("ENABLE_SPLUNK_LOG", not self.enable_debug_mode)
        '''JSON log lines for splunk. Plain text in debug mode unless set.'''
