# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Shared infrastructure for the attribute provider: configuration, logging, parsing & key handling."""
