# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""GLEIF external API package.

Purpose:
    Group GLEIF-related infrastructure modules:

    * settings: Pydantic settings for the GLEIF client.
    * client: Bounded-timeout async HTTP client for LEI record lookups.
"""

from __future__ import annotations
